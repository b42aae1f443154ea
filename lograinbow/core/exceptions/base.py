"""lograinbow core exception classes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from lograinbow.core.exceptions.codes import ErrorCode


class RainbowError(Exception):
    """Base class for every error raised by lograinbow."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode | str = ErrorCode.GENERAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        """Initialise the error.

        Args:
            message: human readable diagnostic
            error_code: stable machine readable code
            details: extra structured context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code.value if isinstance(error_code, ErrorCode) else error_code
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        """Return a serializable payload representing the error."""

        return {
            "code": self.error_code,
            "message": self.message,
            "details": dict(self.details),
        }


class ConfigurationError(RainbowError):
    """Invalid configuration value."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ProviderFailure(RainbowError):
    """A single price provider could not deliver usable history.

    Recoverable: the acquisition chain records it and moves on to the next
    provider.
    """

    def __init__(
        self,
        message: str,
        provider_name: str,
        details: dict[str, Any] | None = None,
    ):
        super_details = dict(details or {})
        super_details["provider"] = provider_name
        super().__init__(message, ErrorCode.PROVIDER_FAILURE, super_details)
        self.provider_name = provider_name

    def describe(self) -> str:
        """Return ``"<provider>: <message>"``."""
        return f"{self.provider_name}: {self.message}"


class AggregateAcquisitionFailure(RainbowError):
    """Every provider in the chain failed."""

    def __init__(self, failures: Sequence[ProviderFailure]):
        self.failures: tuple[ProviderFailure, ...] = tuple(failures)
        reasons = " | ".join(failure.describe() for failure in self.failures)
        message = "All data providers failed"
        if reasons:
            message = f"{message}: {reasons}"
        super().__init__(
            message,
            ErrorCode.ALL_PROVIDERS_FAILED,
            {
                "failed_providers": [
                    {"provider": failure.provider_name, "message": failure.message}
                    for failure in self.failures
                ]
            },
        )


class InsufficientDataError(RainbowError):
    """Too few usable observations survived normalization."""

    def __init__(self, count: int, minimum: int = 3):
        super().__init__(
            f"Need at least {minimum} valid observations, got {count}",
            ErrorCode.INSUFFICIENT_DATA,
            {"count": count, "minimum": minimum},
        )
        self.count = count
        self.minimum = minimum


class SingularFitError(RainbowError):
    """The normal-equations determinant is zero."""

    def __init__(self, determinant: float = 0.0, points: int | None = None):
        details: dict[str, Any] = {"determinant": determinant}
        if points is not None:
            details["points"] = points
        super().__init__(
            "Quadratic fit is singular (determinant is zero)",
            ErrorCode.SINGULAR_FIT,
            details,
        )
        self.determinant = determinant


class BandOverflowError(RainbowError):
    """A band boundary exceeds the float range.

    Happens only when the residual spread is absurdly wide, e.g. prices
    jumping between 1e-300 and 1e300.
    """

    def __init__(self, multiplier: float, std_dev: float):
        super().__init__(
            f"Band boundary for multiplier {multiplier} overflows (residual std-dev {std_dev})",
            ErrorCode.BAND_OVERFLOW,
            {"multiplier": multiplier, "std_dev": std_dev},
        )
