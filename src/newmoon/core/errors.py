class NewMoonError(Exception):
    """Base error."""

class InvalidJulianDayError(NewMoonError, ValueError):
    """Raised when a Julian Day is not a finite number."""

class DeltaTRangeError(NewMoonError, ValueError):
    """Raised by the strict ΔT model for a year outside its polynomial bands."""
