"""Exception handling module."""

from lograinbow.core.exceptions.base import (
    AggregateAcquisitionFailure,
    BandOverflowError,
    ConfigurationError,
    InsufficientDataError,
    ProviderFailure,
    RainbowError,
    SingularFitError,
)
from lograinbow.core.exceptions.codes import ErrorCode

__all__ = [
    "RainbowError",
    "BandOverflowError",
    "ConfigurationError",
    "ProviderFailure",
    "AggregateAcquisitionFailure",
    "InsufficientDataError",
    "SingularFitError",
    "ErrorCode",
]
