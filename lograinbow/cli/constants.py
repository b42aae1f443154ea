"""Process exit codes used by the CLI."""

SYSTEM_EXIT_CODE = 1
VALIDATION_EXIT_CODE = 2
PROVIDER_EXIT_CODE = 3
DATA_EXIT_CODE = 4

__all__ = ["SYSTEM_EXIT_CODE", "VALIDATION_EXIT_CODE", "PROVIDER_EXIT_CODE", "DATA_EXIT_CODE"]
