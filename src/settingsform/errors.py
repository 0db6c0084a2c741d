"""Exception definitions for settingsform"""


class SettingsFormException(Exception):
    """Base exception for all settingsform errors.

    Catch this when you don't need to tell the specific failure apart.
    """

    pass


class ConfigException(SettingsFormException):
    """Raised when configuration validation or loading fails.

    Use this exception when:
    - The configuration file cannot be found
    - Configuration validation fails (missing required fields, invalid values)
    """

    pass


class SchemaError(SettingsFormException):
    """Raised when a settings document is not well-formed.

    Use this exception when:
    - The settings source file cannot be found or parsed
    - ``sections`` is not a list after normalization
    - A section or field fails model validation

    Nothing is registered once this has been raised.
    """

    pass


class NonceError(SettingsFormException):
    """Raised when a form submission carries a missing or invalid nonce."""

    pass


class StorageException(SettingsFormException):
    pass
