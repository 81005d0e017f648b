"""Exceptions raised by magpie_config."""


class ConfigurationError(ValueError):
    """Raised when an experiment configuration is missing, malformed or invalid."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        if field:
            message = f"{field}: {message}"
        super().__init__(message)
