"""
Unified hierarchy of error types. These inherit from standard errors like
ValueError but are more fine-grained.
"""

from typing import Tuple, Type


class MdspaceError(ValueError):
    """Base class for mdspace runtime errors."""

    pass


class UnexpectedError(MdspaceError):
    """For unexpected errors or runtime check failures."""

    pass


class SelfExplanatoryError(MdspaceError):
    """Common errors that arise from 'normal' problems that are largely self-explanatory,
    i.e., no stack trace should be necessary when reporting to the user."""

    pass


class InvalidInput(SelfExplanatoryError):
    """Raised when the wrong kind of input is given to an operation, such as a
    malformed filesystem event."""

    pass


class InvalidOperation(InvalidInput):
    """Raised when an operation can't be performed."""

    pass


class InvalidState(SelfExplanatoryError):
    """Raised when settings or workspace state are not valid for an operation."""

    pass


NONFATAL_EXCEPTIONS: Tuple[Type[Exception], ...] = (SelfExplanatoryError,)
"""Exceptions that are not fatal and usually don't merit a full stack trace."""


def is_fatal(exception: Exception) -> bool:
    for e in NONFATAL_EXCEPTIONS:
        if isinstance(exception, e):
            return False
    return True
