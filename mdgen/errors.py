"""Exception hierarchy for definition-path resolution and generation."""

from __future__ import annotations


class MdgenError(Exception):
    """Base class for all mdgen errors."""


class InvalidArgumentError(MdgenError, ValueError):
    """A required string argument is missing or blank."""


class PlatformUnsupportedError(MdgenError):
    """The host platform is not one of the known platforms."""


class ConfigurationMissingError(MdgenError):
    """No default output rule (or its environment value) is available."""
