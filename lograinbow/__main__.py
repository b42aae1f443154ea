from lograinbow.cli.main import run

run()
