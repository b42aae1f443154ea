"""Standardized error codes."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes carried by every :class:`RainbowError`."""

    GENERAL_ERROR = "GENERAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # acquisition
    PROVIDER_FAILURE = "PROVIDER_FAILURE"
    ALL_PROVIDERS_FAILED = "ALL_PROVIDERS_FAILED"

    # pipeline
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    SINGULAR_FIT = "SINGULAR_FIT"
    BAND_OVERFLOW = "BAND_OVERFLOW"

    # command line
    OUTPUT_ERROR = "OUTPUT_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


__all__ = ["ErrorCode"]
