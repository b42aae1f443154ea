"""Tests for the closed-form quadratic fit in log space."""

from __future__ import annotations

import math
import random
from datetime import UTC, datetime, timedelta

import numpy as np
import pytest

from lograinbow.core.exceptions import SingularFitError
from lograinbow.core.models import Observation, RegressionCoefficients, Series
from lograinbow.core.services import RegressionEngine, fit_quadratic, residual_statistics


def _series_from_log(values: list[float]) -> Series:
    start = datetime(2015, 1, 1, tzinfo=UTC)
    return Series(
        tuple(
            Observation(timestamp=start + timedelta(days=i), price=math.exp(value))
            for i, value in enumerate(values)
        )
    )


def _sse(x: np.ndarray, y: np.ndarray, a: float, b: float, c: float) -> float:
    return float(np.sum((y - (a * x * x + b * x + c)) ** 2))


def test_matches_independent_least_squares_solver() -> None:
    rng = random.Random(11)
    x = [float(i) for i in range(200)]
    y = [0.0004 * xi * xi + 0.01 * xi + 3.0 + rng.gauss(0.0, 0.2) for xi in x]

    ours = fit_quadratic(x, y)
    xs, ys = np.array(x), np.array(y)
    a, b, c = np.polyfit(xs, ys, 2)

    # normal equations lose digits on raw power sums; compare the fit, not the digits
    assert _sse(xs, ys, ours.a, ours.b, ours.c) == pytest.approx(_sse(xs, ys, a, b, c), rel=1e-6)
    fitted = [ours.evaluate(xi) for xi in x]
    assert fitted == pytest.approx(list(np.polyval([a, b, c], xs)), abs=1e-4)


def test_perturbing_the_fit_never_lowers_squared_error() -> None:
    rng = random.Random(3)
    x = [float(i) for i in range(60)]
    y = [math.log(100 + 5 * xi) + rng.gauss(0.0, 0.1) for xi in x]
    fit = fit_quadratic(x, y)
    xs, ys = np.array(x), np.array(y)
    best = _sse(xs, ys, fit.a, fit.b, fit.c)

    for da, db, dc in [(1e-6, 0, 0), (0, 1e-4, 0), (0, 0, 1e-3), (-1e-6, 1e-4, -1e-3)]:
        assert _sse(xs, ys, fit.a + da, fit.b + db, fit.c + dc) >= best


def test_exact_quadratic_has_zero_residual_spread() -> None:
    a, b, c = 0.0005, 0.01, 2.0
    values = [a * i * i + b * i + c for i in range(30)]

    fit = RegressionEngine().fit(_series_from_log(values))

    assert fit.coefficients.a == pytest.approx(a, rel=1e-6)
    assert fit.coefficients.b == pytest.approx(b, rel=1e-6)
    assert fit.coefficients.c == pytest.approx(c, rel=1e-6)
    assert fit.residuals.std_dev == pytest.approx(0.0, abs=1e-6)
    assert fit.residuals.mean == pytest.approx(0.0, abs=1e-6)
    assert fit.fitted_log == pytest.approx(values, abs=1e-6)


def test_uses_index_not_elapsed_time() -> None:
    # uneven gaps between timestamps must not change the fit
    start = datetime(2015, 1, 1, tzinfo=UTC)
    prices = [10.0, 12.0, 15.0, 14.0, 20.0]
    gaps = [0, 1, 30, 31, 400]
    series = Series(
        tuple(Observation(timestamp=start + timedelta(days=g), price=p) for g, p in zip(gaps, prices))
    )

    fit = RegressionEngine().fit(series)
    expected = fit_quadratic([0.0, 1.0, 2.0, 3.0, 4.0], [math.log(p) for p in prices])

    assert fit.coefficients == expected


def test_residual_statistics_use_population_deviation() -> None:
    x = [0.0, 1.0, 2.0, 3.0]
    y = [1.0, 3.0, 1.0, 3.0]
    flat = RegressionCoefficients(a=0.0, b=0.0, c=2.0)

    stats = residual_statistics(x, y, flat)

    # residuals -1, 1, -1, 1: population variance 1, sample variance 4/3
    assert stats.mean == 0.0
    assert stats.std_dev == 1.0


def test_identical_x_values_are_singular() -> None:
    with pytest.raises(SingularFitError) as excinfo:
        fit_quadratic([0.0, 0.0, 0.0], [1.0, 2.0, 3.0])

    assert excinfo.value.determinant == 0
    assert excinfo.value.error_code == "SINGULAR_FIT"


def test_two_points_are_singular() -> None:
    with pytest.raises(SingularFitError):
        fit_quadratic([0.0, 1.0], [1.0, 2.0])


def test_mismatched_lengths_are_rejected() -> None:
    with pytest.raises(ValueError, match="same length"):
        fit_quadratic([0.0, 1.0, 2.0], [1.0, 2.0])
