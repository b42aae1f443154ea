"""Quadratic least-squares fit of log price against point index."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from lograinbow.core.exceptions import SingularFitError
from lograinbow.core.logging import bind
from lograinbow.core.models import RegressionCoefficients, ResidualStatistics, Series


def _det3(m: Sequence[float]) -> float:
    a, b, c, d, e, f, g, h, i = m
    return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)


def fit_quadratic(x: Sequence[float], y: Sequence[float]) -> RegressionCoefficients:
    """Ordinary least squares for ``y = a*x**2 + b*x + c``.

    Solves the 3x3 normal equations in closed form with Cramer's rule.

    Raises:
        SingularFitError: the coefficient determinant is exactly zero
    """
    if len(x) != len(y):
        raise ValueError(f"x and y must have the same length ({len(x)} != {len(y)})")

    n = len(x)
    sx = sx2 = sx3 = sx4 = sy = sxy = sx2y = 0.0
    for xi, yi in zip(x, y):
        xi2 = xi * xi
        sx += xi
        sx2 += xi2
        sx3 += xi2 * xi
        sx4 += xi2 * xi2
        sy += yi
        sxy += xi * yi
        sx2y += xi2 * yi

    # columns: a, b, c ; right-hand side: (sx2y, sxy, sy)
    matrix = (sx4, sx3, sx2, sx3, sx2, sx, sx2, sx, n)
    determinant = _det3(matrix)
    if determinant == 0:
        raise SingularFitError(determinant, points=n)

    det_a = _det3((sx2y, sx3, sx2, sxy, sx2, sx, sy, sx, n))
    det_b = _det3((sx4, sx2y, sx2, sx3, sxy, sx, sx2, sy, n))
    det_c = _det3((sx4, sx3, sx2y, sx3, sx2, sxy, sx2, sx, sy))
    return RegressionCoefficients(
        a=det_a / determinant,
        b=det_b / determinant,
        c=det_c / determinant,
    )


def residual_statistics(
    x: Sequence[float],
    y: Sequence[float],
    coefficients: RegressionCoefficients,
) -> ResidualStatistics:
    """Mean and population standard deviation of ``y - f(x)``."""

    n = len(y)
    if n == 0:
        return ResidualStatistics(mean=0.0, std_dev=0.0)
    residuals = [yi - coefficients.evaluate(xi) for xi, yi in zip(x, y)]
    mean = sum(residuals) / n
    variance = sum((residual - mean) ** 2 for residual in residuals) / n
    return ResidualStatistics(mean=mean, std_dev=math.sqrt(variance))


@dataclass(frozen=True)
class RegressionFit:
    """Fitted coefficients, residual statistics and fitted ``ln(price)`` per index."""

    coefficients: RegressionCoefficients
    residuals: ResidualStatistics
    fitted_log: tuple[float, ...]


class RegressionEngine:
    """Fits the long-term log-price trend of a series.

    ``x`` is the 0-based position in the series, not elapsed time, so the
    trend is evenly spaced over the observations.
    """

    def fit(self, series: Series) -> RegressionFit:
        x = [float(i) for i in range(len(series))]
        y = [math.log(price) for price in series.prices]

        coefficients = fit_quadratic(x, y)
        residuals = residual_statistics(x, y, coefficients)
        fitted = tuple(coefficients.evaluate(xi) for xi in x)

        bind(component="RegressionEngine").debug(
            "Fitted quadratic trend",
            a=coefficients.a,
            b=coefficients.b,
            c=coefficients.c,
            residual_mean=residuals.mean,
            residual_std=residuals.std_dev,
        )
        return RegressionFit(coefficients=coefficients, residuals=residuals, fitted_log=fitted)
