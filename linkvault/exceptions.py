class LinkVaultError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkvault_error'


class ClientInputError(LinkVaultError):
    """Base exception for errors the caller can fix by changing its input."""

    error_code = 'client:client_input_error'


class InvalidUrlError(ClientInputError):
    """Raised when the URL to shorten is not a well-formed absolute URL."""

    error_code = 'client:invalid_url'


class InvalidAliasError(ClientInputError):
    """Raised when a custom alias is empty, too long or uses forbidden characters."""

    error_code = 'client:invalid_alias'


class AliasTakenError(ClientInputError):
    """Raised when a custom alias is already mapped to a URL."""

    error_code = 'client:alias_taken'


class ServiceError(LinkVaultError):
    """Base exception for failures of the service itself."""

    error_code = 'service:service_error'


class CodeSpaceExhaustedError(ServiceError):
    """Raised when every generated shortcode attempt collided with an existing one."""

    error_code = 'service:code_space_exhausted'


class IntegrityError(ServiceError):
    """Base exception for stored data that cannot be trusted."""

    error_code = 'service:integrity_error'


class DecryptionError(IntegrityError):
    """Raised when a stored payload is malformed or fails authentication."""

    error_code = 'service:decryption_error'


class ConfigurationError(LinkVaultError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class KeyLoadError(ConfigurationError):
    """Raised when the encryption key file is missing, unreadable or malformed."""

    error_code = 'config:key_load_error'
