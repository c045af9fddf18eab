"""Exception types for configuration parsing."""


class ConfigurationError(ValueError):
    """A configuration document does not have the expected structure."""

    pass
