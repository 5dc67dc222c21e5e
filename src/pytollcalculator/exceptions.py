"""Library exceptions."""


class PyTollCalculatorError(Exception):
    """Base exception for the library."""


class AuthError(PyTollCalculatorError):
    """Raised when the rules source rejects the credentials."""


class NetworkError(PyTollCalculatorError):
    """Raised when network communication fails."""


class ValidationError(PyTollCalculatorError):
    """Raised when inputs fail validation."""


class ConfigError(PyTollCalculatorError):
    """Raised when a rule set is malformed and must be rejected."""


class ProviderError(PyTollCalculatorError):
    """Raised when the rules source returns an error or is misconfigured."""


class RulesUnavailableError(PyTollCalculatorError):
    """Raised when no rule set could be obtained and none is held."""
