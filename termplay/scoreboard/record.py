"""
Score Records
=============

The score record and its fixed-size binary form.

A board file is a flat array of records with no header. Each record holds a
native int64 date, a uint32 score and a null-padded name buffer, with natural
alignment padding: 48 bytes for the default 32-byte name.
Missing trailing records read as zeros.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable, List

import numpy as np

MAX_SCORE = 2 ** 32 - 1


@dataclass(frozen=True)
class Score:
    """One board entry."""
    date: int            # Seconds since the epoch
    score: int
    name: str = ""

    @staticmethod
    def now(score: int, name: str = "") -> "Score":
        """Record stamped with the current time."""
        return Score(date=int(time.time()), score=score, name=name)

    @property
    def is_placeholder(self) -> bool:
        """Zero-score slots are padding, never ranked entries."""
        return self.score == 0

    @property
    def display_name(self) -> str:
        """Name up to its first null, with undecodable bytes shown as U+FFFD."""
        raw = self.name.encode("utf-8", errors="surrogateescape")
        return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")

    def with_name(self, name: str) -> "Score":
        return Score(date=self.date, score=self.score, name=name)


def record_dtype(name_length: int = 32) -> np.dtype:
    """Structured dtype matching the on-disk record layout."""
    return np.dtype(
        [("date", np.int64), ("score", np.uint32), ("name", f"S{name_length}")],
        align=True,
    )


def sanitize_name(raw: str, name_length: int = 32) -> str:
    """
    Make a typed name safe to store.

    Control characters become spaces and the UTF-8 form is cut to leave room
    for a terminating null, without splitting a character.
    """
    cleaned = "".join(" " if ord(ch) < 0x20 or ord(ch) == 0x7F else ch for ch in raw)
    encoded = cleaned.encode("utf-8")[: name_length - 1]
    return encoded.decode("utf-8", errors="ignore")


def _encode_name(name: str, name_length: int) -> bytes:
    raw = name.encode("utf-8", errors="surrogateescape")
    if len(raw) > name_length:
        raise ValueError(f"name {name!r} does not fit in {name_length} bytes")
    return raw


def _decode_name(raw: bytes) -> str:
    # numpy strips trailing nulls only; a full buffer has no terminator
    return bytes(raw).decode("utf-8", errors="surrogateescape")


def decode_records(data: bytes, capacity: int, name_length: int = 32) -> List[Score]:
    """
    Parse the occupied prefix of a board file.

    Args:
        data: File contents; may be short or empty.
        capacity: Maximum number of records to read.
        name_length: Name buffer size in bytes.

    Returns:
        Records in file order up to the first zero-score placeholder.
    """
    dtype = record_dtype(name_length)
    count = min(len(data) // dtype.itemsize, capacity)
    records: List[Score] = []
    if count == 0:
        return records

    array = np.frombuffer(data, dtype=dtype, count=count)
    for row in array:
        record = Score(date=int(row["date"]), score=int(row["score"]), name=_decode_name(row["name"]))
        if record.is_placeholder:
            break
        records.append(record)
    return records


def encode_records(records: Iterable[Score], capacity: int, name_length: int = 32) -> bytes:
    """
    Serialize records into a full-capacity board image.

    Names are stored as given, so records read from a board are written
    back byte for byte; sanitize new names with sanitize_name first. Slots
    after the last record are zero placeholders.
    """
    array = np.zeros(capacity, dtype=record_dtype(name_length))
    for i, record in enumerate(records):
        if i >= capacity:
            raise ValueError(f"more than {capacity} records")
        if not 0 <= record.score <= MAX_SCORE:
            raise ValueError(f"score {record.score} does not fit in a record")
        array[i] = (record.date, record.score, _encode_name(record.name, name_length))
    return array.tobytes()
