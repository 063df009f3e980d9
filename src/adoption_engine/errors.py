"""Exceptions raised by the adoption engine."""


class EngineError(Exception):
    """Base class for adoption engine failures."""


class InvalidParameter(EngineError, ValueError):
    """Raised when an argument is outside its permitted range."""


class InvalidOperation(EngineError):
    """Raised when an edit would leave a curve in an unusable state."""


class DivisionUndefined(EngineError, ZeroDivisionError):
    """Raised when a ratio is requested against a zero denominator."""
