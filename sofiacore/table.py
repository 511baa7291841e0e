"""Tables of floating-point values read from delimited text files."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator

from .parameter import _parse_float

logger = logging.getLogger(__name__)

MAX_LINE_SIZE = 65536
"""Maximum length of a single line in a table file, in characters."""

_WHITESPACE = " \t\n\r\v\f"


class TableError(ValueError):
    """Raised for invalid table input or unreadable table files."""


def _read_chunks(handle: Iterable[str]) -> Iterator[str]:
    """Yield lines, splitting any longer than the maximum line size."""
    limit = MAX_LINE_SIZE - 1
    for line in handle:
        for start in range(0, len(line), limit):
            yield line[start:start + limit]


def _data_lines(handle: Iterable[str]) -> Iterator[str]:
    """Yield trimmed lines that start with an alphanumeric character."""
    for chunk in _read_chunks(handle):
        line = chunk.strip(_WHITESPACE)
        if line and line[0].isascii() and line[0].isalnum():
            yield line


def _tokens(line: str, delimiters: str) -> list[str]:
    """Split line at any of the delimiter characters, merging consecutive ones."""
    tokens: list[str] = []
    current: list[str] = []
    for char in line:
        if char in delimiters:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        tokens.append("".join(current))
    return tokens


class Table:
    """A rectangular table of floats; create one with Table.from_file()."""

    __slots__ = ("_cols", "_data")

    def __init__(self) -> None:
        self._cols = 0
        self._data: list[list[float]] = []

    @classmethod
    def from_file(cls, filename: str | os.PathLike[str], delimiters: str) -> Table:
        """Read a table from a text file.

        Columns are separated by any of the characters in delimiters, with
        consecutive delimiters merged. Empty lines and lines not starting
        with an alphanumeric character are skipped. The first data row sets
        the number of columns; extra columns in later rows are ignored and
        missing ones raise TableError. Entries that are not numbers become 0.
        If the file holds no data, an empty table is returned.
        """
        name = os.fspath(filename)
        if not name:
            raise TableError("Empty file name provided.")
        if delimiters is None:
            raise TableError("No delimiters provided.")

        try:
            handle = open(filename, encoding="utf-8", errors="replace")
        except OSError as exc:
            raise TableError(f"Failed to open input file: {name}.") from exc

        with handle:
            lines = list(_data_lines(handle))

        cols = 0
        for line in lines:
            cols = len(_tokens(line, delimiters))
            if cols:
                break

        table = cls()
        if cols == 0:
            logger.warning("No valid data found in file %s. Returning empty table.", name)
            return table

        table._cols = cols
        for row_number, line in enumerate(lines, start=1):
            entries = _tokens(line, delimiters)
            if len(entries) < cols:
                raise TableError(
                    f"Inconsistent number of data columns in file {name}. "
                    f"{cols} columns expected, but only {len(entries)} columns "
                    f"found in data row {row_number}."
                )
            table._data.append([_parse_float(entry) for entry in entries[:cols]])
        return table

    @property
    def rows(self) -> int:
        """Number of table rows."""
        return len(self._data)

    @property
    def cols(self) -> int:
        """Number of table columns."""
        return self._cols

    def _check_index(self, row: int, col: int) -> None:
        if not (0 <= row < len(self._data) and 0 <= col < self._cols):
            raise IndexError("Requested Table column or row out of range.")

    def get(self, row: int, col: int) -> float:
        """Return the value at (row, col)."""
        self._check_index(row, col)
        return self._data[row][col]

    def set(self, row: int, col: int, value: float) -> None:
        """Overwrite the value at (row, col)."""
        self._check_index(row, col)
        self._data[row][col] = float(value)

    def __repr__(self) -> str:
        return f"Table(rows={self.rows}, cols={self._cols})"