"""Errors raised while loading and generating a theater."""

from __future__ import annotations


class TheaterConfigurationError(Exception):
    """Base exception for fatal theater configuration problems."""
    pass


class DuplicateTemplateError(TheaterConfigurationError):
    """Raised when a template name is registered twice in one region."""
    pass


class ExclusionTypeMismatchError(TheaterConfigurationError):
    """Raised when an exclusion group would span more than one object type."""
    pass


class InvalidLimitsError(TheaterConfigurationError):
    """Raised when spawn limits are not 0 <= min <= max."""
    pass


class TemplateDefinitionError(TheaterConfigurationError):
    """Raised when a template definition is malformed."""
    pass


class RegionDefinitionError(TheaterConfigurationError):
    """Raised when a region.def file fails validation."""

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result


class DuplicateAssetError(TheaterConfigurationError):
    """Raised when two assets with the same name reach the asset manager."""
    pass


class RegionStateError(RuntimeError):
    """Raised when a region operation is invoked in the wrong lifecycle state."""
    pass
