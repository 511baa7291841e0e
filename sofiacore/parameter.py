"""Named parameter settings stored as strings, with typed accessors."""

from __future__ import annotations

import logging
import math
import os
import re
from collections.abc import Iterator
from enum import IntEnum

logger = logging.getLogger(__name__)

MAX_LINE_SIZE = 1024
"""Maximum length of a single line in a parameter file, in characters."""

_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1
_ULONG_MOD = 2**64

_HEX_FLOAT_RE = re.compile(
    r"\s*([+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?)"
)
_DEC_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT_RE = re.compile(r"\s*([+-]?\d+)")


class ParameterError(ValueError):
    """Raised for invalid parameter input or unreadable parameter files."""


class LoadMode(IntEnum):
    """How a parameter file is merged into an existing parameter set."""

    APPEND = 0
    UPDATE = 1


DEFAULTS: tuple[tuple[str, str], ...] = (
    # Global settings
    ("pipeline.verbose", "false"),
    ("pipeline.pedantic", "true"),
    ("pipeline.threads", "0"),
    # Input
    ("input.data", ""),
    ("input.region", ""),
    ("input.gain", ""),
    ("input.noise", ""),
    ("input.weights", ""),
    ("input.mask", ""),
    ("input.invert", "false"),
    # Flagging
    ("flag.region", ""),
    ("flag.catalog", ""),
    ("flag.radius", "5"),
    ("flag.auto", "false"),
    ("flag.threshold", "5.0"),
    ("flag.log", "false"),
    # Continuum subtraction
    ("contsub.enable", "false"),
    ("contsub.order", "0"),
    ("contsub.threshold", "2.0"),
    ("contsub.shift", "4"),
    ("contsub.padding", "3"),
    # Noise scaling
    ("scaleNoise.enable", "false"),
    ("scaleNoise.mode", "spectral"),
    ("scaleNoise.statistic", "mad"),
    ("scaleNoise.fluxRange", "negative"),
    ("scaleNoise.windowXY", "25"),
    ("scaleNoise.windowZ", "15"),
    ("scaleNoise.gridXY", "0"),
    ("scaleNoise.gridZ", "0"),
    ("scaleNoise.interpolate", "false"),
    ("scaleNoise.scfind", "false"),
    # Ripple filter
    ("rippleFilter.enable", "false"),
    ("rippleFilter.statistic", "median"),
    ("rippleFilter.windowXY", "31"),
    ("rippleFilter.windowZ", "15"),
    ("rippleFilter.gridXY", "0"),
    ("rippleFilter.gridZ", "0"),
    ("rippleFilter.interpolate", "false"),
    # S+C finder
    ("scfind.enable", "true"),
    ("scfind.kernelsXY", "0, 3, 6"),
    ("scfind.kernelsZ", "0, 3, 7, 15"),
    ("scfind.threshold", "5.0"),
    ("scfind.replacement", "2.0"),
    ("scfind.statistic", "mad"),
    ("scfind.fluxRange", "negative"),
    # Threshold finder
    ("threshold.enable", "false"),
    ("threshold.threshold", "5.0"),
    ("threshold.mode", "relative"),
    ("threshold.statistic", "mad"),
    ("threshold.fluxRange", "negative"),
    # Linker
    ("linker.enable", "true"),
    ("linker.radiusXY", "1"),
    ("linker.radiusZ", "1"),
    ("linker.minSizeXY", "5"),
    ("linker.minSizeZ", "5"),
    ("linker.maxSizeXY", "0"),
    ("linker.maxSizeZ", "0"),
    ("linker.minPixels", "0"),
    ("linker.maxPixels", "0"),
    ("linker.minFill", "0.0"),
    ("linker.maxFill", "0.0"),
    ("linker.positivity", "false"),
    ("linker.keepNegative", "false"),
    # Reliability
    ("reliability.enable", "false"),
    ("reliability.parameters", "peak, sum, mean"),
    ("reliability.threshold", "0.9"),
    ("reliability.scaleKernel", "0.4"),
    ("reliability.minSNR", "3.0"),
    ("reliability.minPixels", "0"),
    ("reliability.autoKernel", "false"),
    ("reliability.iterations", "30"),
    ("reliability.tolerance", "0.05"),
    ("reliability.catalog", ""),
    ("reliability.plot", "true"),
    ("reliability.debug", "false"),
    # Mask dilation
    ("dilation.enable", "false"),
    ("dilation.iterationsXY", "10"),
    ("dilation.iterationsZ", "5"),
    ("dilation.threshold", "0.001"),
    # Parameterisation
    ("parameter.enable", "true"),
    ("parameter.wcs", "true"),
    ("parameter.physical", "false"),
    ("parameter.prefix", "SoFiA"),
    ("parameter.offset", "false"),
    # Output
    ("output.directory", ""),
    ("output.filename", ""),
    ("output.writeCatASCII", "true"),
    ("output.writeCatXML", "true"),
    ("output.writeCatSQL", "false"),
    ("output.writeNoise", "false"),
    ("output.writeFiltered", "false"),
    ("output.writeMask", "false"),
    ("output.writeMask2d", "false"),
    ("output.writeRawMask", "false"),
    ("output.writeMoments", "false"),
    ("output.writeCubelets", "false"),
    ("output.marginCubelets", "10"),
    ("output.thresholdMom12", "0.0"),
    ("output.overwrite", "true"),
)


def _parse_float(text: str) -> float:
    """Parse the leading floating-point number of text; 0.0 if there is none."""
    match = _HEX_FLOAT_RE.match(text)
    if match:
        try:
            return float.fromhex(match.group(1))
        except ValueError:
            pass
    match = _DEC_FLOAT_RE.match(text)
    if not match:
        return 0.0
    token = match.group(1)
    try:
        return float(token)
    except ValueError:
        return math.nan if "nan" in token.lower() else 0.0


def _parse_int(text: str) -> int:
    """Parse the leading decimal integer of text, clamped to a signed 64-bit range."""
    match = _INT_RE.match(text)
    if not match:
        return 0
    return max(_LONG_MIN, min(_LONG_MAX, int(match.group(1))))


def _is_setting_start(char: str) -> bool:
    return char.isascii() and char.isalnum()


def _read_chunks(handle) -> Iterator[str]:
    """Yield lines, splitting any longer than the maximum line size."""
    limit = MAX_LINE_SIZE - 1
    for line in handle:
        for start in range(0, len(line), limit):
            yield line[start:start + limit]


def _split_setting(line: str) -> tuple[str, str | None]:
    """Split 'key = value # comment' into key and value (None if absent)."""
    key, sep, rest = line.partition("=")
    if not sep:
        return key.strip(), None
    rest = rest.lstrip("#")
    if not rest:
        return key.strip(), None
    return key.strip(), rest.split("#", 1)[0].strip()


class ParameterSet:
    """An ordered collection of named parameter settings held as strings."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = bool(verbose)
        self._settings: dict[str, str] = {}

    def _warn(self, message: str, *args: object) -> None:
        if self.verbose:
            logger.warning(message, *args)

    @staticmethod
    def _check_key(key: str) -> None:
        if not key:
            raise ParameterError("Empty parameter keyword provided.")

    def __len__(self) -> int:
        return len(self._settings)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        self._check_key(key)
        return key in self._settings

    def __iter__(self) -> Iterator[str]:
        return iter(self._settings)

    def set(self, key: str, value: str) -> None:
        """Set key to value, replacing any existing setting of that name."""
        if key in self:
            self._warn("Parameter '%s' already exists. Replacing existing definition.", key)
        self._settings[key] = value

    def index(self, key: str) -> int:
        """Return the position of key; raise KeyError if it is not defined."""
        self._check_key(key)
        for position, name in enumerate(self._settings):
            if name == key:
                return position
        raise KeyError(key)

    def _raw(self, key: str) -> str | None:
        self._check_key(key)
        return self._settings.get(key)

    def get_flt(self, key: str) -> float:
        """Return the value as a float, or NaN if the key is not defined."""
        raw = self._raw(key)
        return math.nan if raw is None else _parse_float(raw)

    def get_int(self, key: str) -> int:
        """Return the value as an integer, or 0 if the key is not defined."""
        raw = self._raw(key)
        return 0 if raw is None else _parse_int(raw)

    def get_uint(self, key: str) -> int:
        """Return the value as an unsigned 64-bit integer, or 0 if not defined."""
        raw = self._raw(key)
        return 0 if raw is None else _parse_int(raw) % _ULONG_MOD

    def get_bool(self, key: str) -> bool:
        """Return True only if the value is exactly 'true'."""
        return self._raw(key) == "true"

    def get_str(self, key: str) -> str | None:
        """Return the raw value string, or None if the key is not defined."""
        return self._raw(key)

    def _item_at(self, index: int) -> tuple[str, str]:
        if not 0 <= index < len(self._settings):
            raise IndexError("Parameter list index out of range.")
        return list(self._settings.items())[index]

    def value_at(self, index: int) -> str:
        """Return the value stored at the given position."""
        return self._item_at(index)[1]

    def key_at(self, index: int) -> str:
        """Return the key stored at the given position."""
        return self._item_at(index)[0]

    def load(self, filename: str | os.PathLike[str], mode: LoadMode = LoadMode.APPEND) -> None:
        """Read 'key = value # comment' settings from a file.

        In APPEND mode every setting is stored. In UPDATE mode only known
        keys are updated; unknown keys raise ParameterError at the end if
        'pipeline.pedantic' is 'true'.
        """
        if not os.fspath(filename):
            raise ParameterError("Empty file name provided.")
        try:
            mode = LoadMode(mode)
        except ValueError:
            raise ParameterError("Mode must be 'APPEND' or 'UPDATE'.") from None

        try:
            handle = open(filename, encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ParameterError(f"Failed to open input file: {os.fspath(filename)}.") from exc

        unknown_parameter = False
        with handle:
            for chunk in _read_chunks(handle):
                line = chunk.strip()
                if not line or not _is_setting_start(line[0]):
                    continue
                key, value = _split_setting(line)
                if not key:
                    self._warn("Failed to parse the following setting: %s", line)
                    continue
                if mode is LoadMode.UPDATE and key not in self:
                    logger.info("  Unknown parameter: '%s'", key)
                    unknown_parameter = True
                    continue
                if not value:
                    self._warn("Parameter '%s' has no value.", key)
                    value = ""
                self.set(key, value)
                if key == "pipeline.verbose":
                    self.verbose = self.get_bool("pipeline.verbose")

        if unknown_parameter and self.get_bool("pipeline.pedantic"):
            raise ParameterError(
                "Unknown parameter settings encountered. Please check "
                "your input or change 'pipeline.pedantic' to 'false'."
            )

    def set_defaults(self) -> None:
        """Create or reset every default setting."""
        for key, value in DEFAULTS:
            self.set(key, value)

    def __repr__(self) -> str:
        return f"ParameterSet(verbose={self.verbose!r}, settings={self._settings!r})"