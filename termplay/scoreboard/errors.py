"""
Scoreboard Errors
=================

Failures of the score files. All of them are fatal for the session: the
command line entry point reports the message and exits with the status the
error carries. Nothing is retried.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Union
import os


class ExitStatus(IntEnum):
    """Process exit statuses, numbered as in sysexits.h."""
    OK = 0
    USAGE = 64
    SOFTWARE = 70
    CANTCREAT = 73
    IOERR = 74


def _describe(cause: Optional[BaseException]) -> str:
    if isinstance(cause, OSError) and cause.strerror:
        return cause.strerror
    return str(cause) if cause is not None else "unknown error"


class ScoreboardError(Exception):
    """Base class for score file failures."""
    exit_status = ExitStatus.SOFTWARE


class FileAccessError(ScoreboardError):
    """The score file could not be opened or created."""
    exit_status = ExitStatus.CANTCREAT

    def __init__(self, path: Union[str, os.PathLike], cause: Optional[BaseException] = None):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"{self.path}: {_describe(cause)}")


class ScoreIOError(ScoreboardError):
    """A read, write or lock call on an open score file failed."""
    exit_status = ExitStatus.IOERR

    def __init__(
        self,
        operation: str,
        path: Union[str, os.PathLike],
        cause: Optional[BaseException] = None,
    ):
        self.operation = operation
        self.path = str(path)
        self.cause = cause
        super().__init__(f"{operation}: {self.path}: {_describe(cause)}")


class SoftwareError(ScoreboardError):
    """A trusted system facility (such as local time conversion) failed."""
    exit_status = ExitStatus.SOFTWARE

    def __init__(self, facility: str, cause: Optional[BaseException] = None):
        self.facility = facility
        self.cause = cause
        super().__init__(f"{facility}: {_describe(cause)}")
