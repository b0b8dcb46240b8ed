"""Error types raised while parsing and executing task commands.

Parse failures all derive from ``CommandError`` and carry a fixed message the
CLI can print verbatim. Execution failures (unknown task index, sync problems)
use their own base classes so callers can tell "you typed it wrong" apart from
"the task list could not do it".
"""

from __future__ import annotations

from typing import Optional

from core.commands import CommandIntent

MESSAGE_INVALID_COMMAND = "Invalid command, please refer to catalog by entering 'help'."
MESSAGE_MISSING_DELIMITER = "Missing ';'"
MESSAGE_MISSING_TITLE = "Title of task is missing, please refer to catalog by entering 'help'"
MESSAGE_MISSING_FIELD_NAME = "Field Name is missing, please refer to catalog by entering 'help edit'"
MESSAGE_MISSING_NEW_VALUE = "New value is missing, please refer to catalog by entering 'help edit'"
MESSAGE_DATETIME_FORMAT = (
    "Please specify both date and time in all fields. "
    "Please use 'mm/dd' format if you want to type standard date."
)
MESSAGE_RESERVED_IN_TITLE = "'+' is a reserved character and should not be found in the title"
MESSAGE_RESERVED_IN_DESCRIPTION = "';' is a reserved character and should not be found in the description"
MESSAGE_RESERVED_CHARACTER = "'{character}' is a reserved character and cannot be used"
MESSAGE_INVALID_FIELD_NAME = "\"{field_name}\" is not a valid Field Name, please refer to catalog by entering 'help edit'"
MESSAGE_INVALID_FORMAT = "INVALID FORMAT. Please refer to catalog by entering 'help {keyword}'"


class CommandError(Exception):
    """Base class for every user-facing parse failure."""

    kind = "command_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.user_message = message


class UnrecognizedCommandError(CommandError):
    """Raised when the command word matches no known intent."""

    kind = "unrecognized_command"

    def __init__(self, message: str = MESSAGE_INVALID_COMMAND) -> None:
        super().__init__(message)


class MissingDelimiterError(CommandError):
    """Raised when an add command has no ';' after its title."""

    kind = "missing_delimiter"

    def __init__(self, message: str = MESSAGE_MISSING_DELIMITER) -> None:
        super().__init__(message)


class MissingFieldError(CommandError):
    """Raised when a required field (title, field name, new value) is empty."""

    kind = "missing_field"


class ReservedCharacterError(CommandError):
    """Raised when a reserved character shows up where it is not allowed."""

    kind = "reserved_character"

    def __init__(self, character: str, message: Optional[str] = None) -> None:
        super().__init__(message or MESSAGE_RESERVED_CHARACTER.format(character=character))
        self.character = character

    @classmethod
    def in_title(cls) -> "ReservedCharacterError":
        return cls("+", MESSAGE_RESERVED_IN_TITLE)

    @classmethod
    def in_description(cls) -> "ReservedCharacterError":
        return cls(";", MESSAGE_RESERVED_IN_DESCRIPTION)


class InvalidFieldNameError(CommandError):
    """Raised when an edit command names a field that does not exist."""

    kind = "invalid_field_name"

    def __init__(self, field_name: str) -> None:
        super().__init__(MESSAGE_INVALID_FIELD_NAME.format(field_name=field_name))
        self.field_name = field_name


class InvalidDateTimeFormatError(CommandError):
    """Raised when a date phrase resolves to no usable timestamps."""

    kind = "invalid_datetime_format"

    def __init__(self, message: str = MESSAGE_DATETIME_FORMAT) -> None:
        super().__init__(message)


class InvalidFormatError(CommandError):
    """Raised when a command is structurally wrong for its intent."""

    kind = "invalid_format"

    def __init__(self, intent: CommandIntent) -> None:
        super().__init__(MESSAGE_INVALID_FORMAT.format(keyword=intent.help_keyword))
        self.intent = intent


class TaskNotFoundError(LookupError):
    """Raised when a command refers to a task index that is not on screen."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Task {index} does not exist")
        self.index = index


class SyncError(RuntimeError):
    """Raised when the remote sync endpoint is missing or rejects a push."""


__all__ = [
    "CommandError",
    "UnrecognizedCommandError",
    "MissingDelimiterError",
    "MissingFieldError",
    "ReservedCharacterError",
    "InvalidFieldNameError",
    "InvalidDateTimeFormatError",
    "InvalidFormatError",
    "TaskNotFoundError",
    "SyncError",
]
