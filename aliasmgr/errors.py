"""Exceptions raised by aliasmgr operations"""

from typing import Optional


class AliasMgrError(Exception):
    """Base class for every error reported to the user"""


class ConfigFileError(AliasMgrError):
    """Raised when the alias file cannot be read, parsed or written."""


class InvalidNameError(AliasMgrError):
    """Raised when an alias or group name has invalid characters."""


class InvalidArgumentError(AliasMgrError):
    """Raised when a command receives arguments it cannot act on."""


class AliasExistsError(AliasMgrError):
    def __init__(self, name: str):
        super().__init__(f"Alias '{name}' already exists")
        self.name = name


class GroupExistsError(AliasMgrError):
    def __init__(self, name: str):
        super().__init__(f"Group '{name}' already exists")
        self.name = name


class _NotFoundError(AliasMgrError):
    kind = "Entry"

    def __init__(self, name: str, suggestion: Optional[str] = None):
        message = f"{self.kind} '{name}' does not exist"
        if suggestion:
            message += f" (did you mean '{suggestion}'?)"
        super().__init__(message)
        self.name = name
        self.suggestion = suggestion


class AliasNotFoundError(_NotFoundError):
    kind = "Alias"


class GroupNotFoundError(_NotFoundError):
    kind = "Group"
