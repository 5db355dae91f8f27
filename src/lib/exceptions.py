"""Exception hierarchy for the speech formatting pipeline.

All custom exceptions inherit from ProsodyError to enable
selective catching at different levels.

Hierarchy:
    ProsodyError (base)
    ├── ConfigError - Configuration issues (invalid env values)
    └── ValidationError - Programmer errors at the API boundary
"""


class ProsodyError(Exception):
    """
    Base exception for all speech formatting errors.

    Catching this will catch all custom exceptions from this module.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigError(ProsodyError):
    """
    Configuration error.

    Raised when configuration is missing or invalid.
    Example: a SpeechChunker built with non-positive limits.
    """

    pass


class ValidationError(ProsodyError):
    """
    Input validation error.

    Raised when a caller passes a value of the wrong kind.
    Examples: non-string text, unknown softening level name.

    Attributes:
        field: Name of the offending argument, if known
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)
