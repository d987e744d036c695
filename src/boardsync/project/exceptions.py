"""Custom exceptions for project board operations."""


class ProjectError(Exception):
    """Base exception for project board errors."""


class NotFoundError(ProjectError):
    """A named part of the board schema does not exist."""


class ProjectNotFoundError(NotFoundError):
    """GitHub Project not found."""


class StatusFieldNotFoundError(NotFoundError):
    """Status field missing from the project or not a single-select field."""


class StatusOptionNotFoundError(NotFoundError):
    """Status field has no option with the given label."""


class AddFailedError(ProjectError):
    """Adding a content object to the project failed."""


class UpdateFailedError(ProjectError):
    """Writing the status of a project item failed."""
