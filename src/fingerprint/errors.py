"""
Errors raised while loading, generating or verifying fingerprints.
All of them are ValueErrors so callers validating input can catch either.
"""
from __future__ import annotations


class FingerprintError(ValueError):
    pass


class MissingConfiguration(FingerprintError):
    """A required option is absent (None) from the merged configuration."""


class UnsupportedAlgorithm(FingerprintError):
    pass


class InvalidThresholds(FingerprintError):
    """Thresholds are not positive, or noise_threshold exceeds threshold."""


class EmptyDocument(FingerprintError):
    pass


class DocumentTooShort(FingerprintError):
    pass


class MissingCandidate(FingerprintError):
    pass
