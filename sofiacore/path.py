"""File paths split into a directory part and a file name part."""

from __future__ import annotations

import os


class PathError(ValueError):
    """Raised when a path component is empty or malformed."""


def _strip_extension(name: str) -> str:
    """Return name without the part from its last dot onward.

    A name without a dot is returned unchanged; a name whose last dot is
    its first character yields an empty string.
    """
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name


class Path:
    """A file path held as a directory (with trailing slash) and a file name.

    Anything before the final '/' is the directory, anything after it the
    file name.
    """

    __slots__ = ("_dir", "_file")

    def __init__(self, path: str = "") -> None:
        self._dir = ""
        self._file = ""
        self.set(path)

    def set(self, path: str) -> None:
        """Set directory and file name from a full path string."""
        if not path:
            self._dir = ""
            self._file = ""
            return
        head, slash, tail = path.rpartition("/")
        if not slash:
            self._dir = ""
            self._file = path
        elif not tail:
            self._dir = path
            self._file = ""
        else:
            self._dir = head + "/"
            self._file = tail

    def set_file(self, file: str) -> None:
        """Replace the file name, leaving the directory unchanged."""
        if not file:
            raise PathError("Empty file name encountered.")
        self._file = file

    def set_dir(self, directory: str) -> None:
        """Replace the directory, adding a trailing slash if missing."""
        if not directory:
            raise PathError("Empty directory name encountered.")
        self._dir = directory if directory.endswith("/") else directory + "/"

    def set_file_from_template(self, basename: str, suffix: str, mimetype: str) -> None:
        """Set the file name to basename (without extension) + suffix + mimetype."""
        self._file = _strip_extension(basename) + suffix + mimetype

    def append_dir_from_template(self, basename: str, appendix: str) -> None:
        """Append a sub-directory named basename (without extension) + appendix."""
        if "/" in basename or "/" in appendix:
            raise PathError("Basename and appendix must not contain '/'.")
        self._dir += _strip_extension(basename) + appendix + "/"

    def append_file(self, appendix: str) -> None:
        """Append a string to the file name."""
        if "/" in appendix:
            raise PathError("Appendix must not contain '/'.")
        self._file += appendix

    @property
    def dir(self) -> str:
        """Directory part, including its trailing slash, or an empty string."""
        return self._dir

    @property
    def file(self) -> str:
        """File name part, or an empty string."""
        return self._file

    @property
    def full(self) -> str:
        """Directory and file name joined into the full path."""
        return self._dir + self._file

    def __str__(self) -> str:
        return self.full

    def __repr__(self) -> str:
        return f"Path({self.full!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return (self._dir, self._file) == (other._dir, other._file)

    def __hash__(self) -> int:
        return hash((self._dir, self._file))

    def file_is_readable(self) -> bool:
        """Return whether the full path can be opened for reading."""
        target = self.full
        if not target:
            return False
        try:
            with open(target, "rb"):
                return True
        except IsADirectoryError:
            return os.access(target, os.R_OK)
        except OSError:
            return False