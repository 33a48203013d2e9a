"""Exceptions raised by Projectify."""


class ProjectifyError(Exception):
    """Base class for all Projectify errors."""


class InvalidStateError(ProjectifyError):
    """Raised when an operation is requested on a graph that cannot support it."""
