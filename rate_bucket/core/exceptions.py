"""Custom exceptions for rate_bucket."""

from __future__ import annotations


class RateBucketError(Exception):
    """Base exception for token bucket errors."""


class InvalidArgumentError(RateBucketError, ValueError):
    """An argument is outside the range an operation accepts."""


class ConfigurationError(RateBucketError):
    """A bucket or setting cannot be assembled from the given configuration."""


class UnsupportedOperationError(RateBucketError, NotImplementedError):
    """The strategy does not support the requested operation."""
