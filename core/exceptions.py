# =============================================================================
# Custom Exceptions for Shift Request Calendar
# =============================================================================

class ShiftAppError(Exception):
    """Base exception class for the shift request calendar."""
    pass

class ValidationError(ShiftAppError):
    """Raised when a required field is missing or empty."""
    pass

class ConflictError(ShiftAppError):
    """Raised when a restore would duplicate a live (date, staff, slot) shift."""
    pass

class PersistenceError(ShiftAppError):
    """Raised when the underlying store operation fails."""
    pass

class DeadlineError(ShiftAppError):
    """Raised when a staff member submits after the request deadline."""
    pass

class AuthorizationError(ShiftAppError):
    """Raised when a staff member attempts an administrator-only operation."""
    pass
