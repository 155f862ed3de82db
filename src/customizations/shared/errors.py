"""Errors raised at the configuration boundary."""

from protean.exceptions import ValidationError


class ConfigurationError(ValidationError):
    """A merchant configuration blob could not be turned into rules or tiers.

    Carries the same ``messages`` mapping as any other ``ValidationError``,
    keyed by the location of the problem (``"tiers[1].percentage"``,
    ``"rules[0].countryCode"``, ``"configuration"``).
    """
