from enum import Enum
from dataclasses import dataclass
from typing import Any
import os


class BindwrapError(Exception):
    """Base class for errors raised by bindwrap itself"""


class MalformedParameterName(BindwrapError, ValueError):
    """Named parameter key does not match `[:]name[<t>|[t]]`"""

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"Invalid param name: {key!r}")


class UnsupportedParamstyle(BindwrapError):
    def __init__(self, paramstyle: str) -> None:
        self.paramstyle = paramstyle
        super().__init__(f"Unsupported DB-API paramstyle: {paramstyle!r}")


class BindType(Enum):
    """Type a value is bound with. Selected by the letter in a type suffix."""

    STR = "s"
    INT = "i"
    BOOL = "b"


class FetchMode(Enum):
    """
    Shape of fetched rows:
    - TUPLE: a tuple of column values
    - DICT: a dict of column name -> value
    - COLUMN: a single column value, the column index is passed as a fetch argument
    - CLASS: an object of the type passed as a fetch argument. Dataclass fields are
      decoded according to their annotations.
    """

    TUPLE = 1
    DICT = 2
    COLUMN = 3
    CLASS = 4


class ErrorMode(Enum):
    """
    What a statement does when the driver fails to execute it:
    - SILENT: `execute()` returns False, the error is logged with debug level
    - WARNING: `execute()` returns False, the error is logged as a warning
    - EXCEPTION: the driver exception is raised
    """

    SILENT = "silent"
    WARNING = "warning"
    EXCEPTION = "exception"


@dataclass(slots=True, frozen=True)
class BindInstruction:
    token: int | str
    value: Any
    type: BindType = BindType.STR


def default_error_mode() -> ErrorMode:
    mode = (os.getenv("BINDWRAP_ERROR_MODE") or ErrorMode.WARNING.value).lower()
    try:
        return ErrorMode(mode)
    except ValueError:
        raise ValueError(
            f"BINDWRAP_ERROR_MODE must be one of "
            f"{', '.join(m.value for m in ErrorMode)}; got {mode!r}"
        ) from None
