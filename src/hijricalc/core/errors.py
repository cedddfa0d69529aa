class HijriError(Exception):
    """Base error."""

class ContractViolationError(HijriError, ValueError):
    """Raised when a caller passes a field value, month index or limit outside its contract."""

class ConvergenceError(HijriError, RuntimeError):
    """Raised when the true-month-start search walks further than any real lunation allows."""

class UnknownCalculationTypeError(HijriError, KeyError):
    """Raised when a calendar type string or engine name is not registered."""

class StateError(HijriError, ValueError):
    """Raised when a persisted calendar state cannot be read."""

class ConfigError(HijriError, ValueError):
    """Raised for malformed configuration values (environment or explicit)."""
