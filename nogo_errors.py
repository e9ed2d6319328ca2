"""
Error hierarchy for the NoGo game

Every error the game can surface inherits from NogoError and carries the
message shown to the user and the process exit code used by the command line.
"""

from typing import Optional


class NogoError(Exception):
    """Base exception for all NoGo errors.

    Attributes:
        code: Machine-readable error code
        exit_code: Process exit status used by the command line
        message: Human-readable error description
    """
    code = "NOGO_ERROR"
    exit_code = 1
    default_message = "NoGo error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class NumArgError(NogoError):
    """Program started with the wrong number of arguments"""
    code = "NUM_ARG"
    exit_code = 1
    default_message = "Usage: nogo p1type p2type [height width | filename]"


class IncorrectTypeError(NogoError):
    """Player type is not 'h' or 'c'"""
    code = "INCORRECT_TYPE"
    exit_code = 2
    default_message = "Invalid type"


class InvalidDimensionError(NogoError):
    """Board height or width outside the allowed range"""
    code = "INVALID_DIMENSION"
    exit_code = 3
    default_message = "Invalid board dimension"


class FailedToOpenError(NogoError):
    """Save file could not be read or written"""
    code = "FAILED_TO_OPEN"
    exit_code = 4
    default_message = "Unable to open file"


class CorruptFileError(NogoError):
    """Save file contents are malformed or inconsistent"""
    code = "CORRUPT_FILE"
    exit_code = 5
    default_message = "Incorrect file contents"


class InvalidPositionError(NogoError):
    """Move placed outside the board"""
    code = "INVALID_POSITION"
    default_message = "Invalid position"


class PositionTakenError(NogoError):
    """Move placed on an occupied cell"""
    code = "POSITION_TAKEN"
    default_message = "Position already taken"
