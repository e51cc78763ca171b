"""
Service Layer Exceptions

Custom exceptions for the WizardService and the drivers built on it.
"""


class WizardNotFoundError(Exception):
    """Raised when no running wizard has the given session id."""
    pass


class UnknownCommandError(Exception):
    """Raised when a wizard is requested for a command that has none."""
    pass


class UnknownRepositoryError(Exception):
    """Raised when a caller pre-seeds a repository id that is not a candidate."""
    pass


class InvalidSelectionError(Exception):
    """
    Raised when a driver refers to items the current step does not have.
    A user backing out is not an error; this is a malformed request.
    """
    pass
