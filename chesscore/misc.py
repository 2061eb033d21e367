"""Version strings, debug statistics and small string, file and path helpers."""

from __future__ import annotations

import datetime
import math
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

VERSION = "dev"
ENGINE_NAME = "Chesscore"
AUTHOR = "the chesscore developers"

MAX_DEBUG_SLOTS = 32

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1

# The characters the C locale classifies as white space.
_WHITESPACE = frozenset(" \t\n\v\f\r")


def _build_date() -> datetime.date:
    try:
        stamp = Path(__file__).stat().st_mtime
    except OSError:
        return datetime.date.today()
    return datetime.date.fromtimestamp(stamp)


def engine_version_info() -> str:
    """Return the engine name and version.

    Development builds carry the build date and a ``nogit`` marker:
    ``<name> dev-YYYYMMDD-nogit``. Releases carry only the version number.
    """
    info = f"{ENGINE_NAME} {VERSION}"
    if VERSION == "dev":
        info += f"-{_build_date():%Y%m%d}-nogit"
    return info


def engine_info(to_uci: bool = False) -> str:
    """Return the version line followed by the authors, in UCI form if asked."""
    return engine_version_info() + ("\nid author " if to_uci else " by ") + AUTHOR


def remove_whitespace(s: str) -> str:
    """Return ``s`` with every white-space character removed."""
    return "".join(c for c in s if c not in _WHITESPACE)


def is_whitespace(s: str) -> bool:
    """Return True if ``s`` holds only white space (or nothing)."""
    return all(c in _WHITESPACE for c in s)


def str_to_size_t(s: str) -> int:
    """Parse the leading unsigned decimal number of ``s``.

    Leading white space and a sign are accepted and trailing text is ignored.
    A negative number wraps around modulo 2**64. Raises ValueError when no
    digits are found and OverflowError when the value does not fit 64 bits.
    """
    text = s.lstrip("".join(_WHITESPACE))
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]
    digits = ""
    for c in text:
        if not ("0" <= c <= "9"):
            break
        digits += c
    if not digits:
        raise ValueError(f"no number in {s!r}")
    value = int(digits)
    if value > _UINT64_MAX:
        raise OverflowError(f"number out of range: {s!r}")
    if negative:
        value = (-value) & _UINT64_MAX
    return value


def read_file_to_string(path: Union[str, os.PathLike]) -> Optional[bytes]:
    """Return the whole content of the file as bytes, or None if it cannot be read."""
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError:
        return None


def get_working_directory() -> str:
    """Return the current working directory, or an empty string if unavailable."""
    try:
        return os.getcwd()
    except OSError:
        return ""


def get_binary_directory(argv0: str) -> str:
    """Return the directory part of ``argv0``, ending with a separator.

    A bare program name gives the working directory; a leading ``./`` is
    replaced by the working directory.
    """
    separator = os.sep
    working_directory = get_working_directory()

    cut = max(argv0.rfind("\\"), argv0.rfind("/"))
    directory = "." + separator if cut < 0 else argv0[: cut + 1]

    if directory.startswith("." + separator):
        directory = working_directory + directory[1:]
    return directory


@dataclass
class _Hit:
    total: int = 0
    hits: int = 0


@dataclass
class _Mean:
    total: int = 0
    sum: int = 0


@dataclass
class _Stdev:
    total: int = 0
    sum: int = 0
    sum_sq: int = 0


@dataclass
class _Extremes:
    total: int = 0
    max: int = _INT64_MIN
    min: int = _INT64_MAX


@dataclass
class _Correl:
    total: int = 0
    sum1: int = 0
    sum1_sq: int = 0
    sum2: int = 0
    sum2_sq: int = 0
    sum12: int = 0


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


def _divide(num: float, den: float) -> float:
    if den:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num)


def _fmt(x: float) -> str:
    return f"{x:g}"


class DebugStats:
    """Run-time statistics collected in numbered slots, safe to use from threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.clear()

    @staticmethod
    def _check(slot: int) -> int:
        if not 0 <= slot < MAX_DEBUG_SLOTS:
            raise IndexError(f"debug slot {slot} out of range 0..{MAX_DEBUG_SLOTS - 1}")
        return slot

    def hit_on(self, cond: bool, slot: int = 0) -> None:
        """Count one event in ``slot`` and whether ``cond`` held."""
        entry = self._hit[self._check(slot)]
        with self._lock:
            entry.total += 1
            if cond:
                entry.hits += 1

    def mean_of(self, value: int, slot: int = 0) -> None:
        """Add ``value`` to the running mean of ``slot``."""
        entry = self._mean[self._check(slot)]
        with self._lock:
            entry.total += 1
            entry.sum += value

    def stdev_of(self, value: int, slot: int = 0) -> None:
        """Add ``value`` to the running standard deviation of ``slot``."""
        entry = self._stdev[self._check(slot)]
        with self._lock:
            entry.total += 1
            entry.sum += value
            entry.sum_sq += value * value

    def extremes_of(self, value: int, slot: int = 0) -> None:
        """Track the smallest and largest value seen in ``slot``."""
        entry = self._extremes[self._check(slot)]
        with self._lock:
            entry.total += 1
            entry.max = max(entry.max, value)
            entry.min = min(entry.min, value)

    def correl_of(self, value1: int, value2: int, slot: int = 0) -> None:
        """Add a pair of values to the running correlation of ``slot``."""
        entry = self._correl[self._check(slot)]
        with self._lock:
            entry.total += 1
            entry.sum1 += value1
            entry.sum1_sq += value1 * value1
            entry.sum2 += value2
            entry.sum2_sq += value2 * value2
            entry.sum12 += value1 * value2

    def report(self) -> str:
        """Return one line per used slot, grouped by statistic."""
        lines: List[str] = []
        with self._lock:
            for i, h in enumerate(self._hit):
                if h.total:
                    lines.append(
                        f"Hit #{i}: Total {h.total} Hits {h.hits} "
                        f"Hit Rate (%) {_fmt(100.0 * h.hits / h.total)}"
                    )
            for i, m in enumerate(self._mean):
                if m.total:
                    lines.append(f"Mean #{i}: Total {m.total} Mean {_fmt(m.sum / m.total)}")
            for i, s in enumerate(self._stdev):
                if s.total:
                    n = s.total
                    r = _sqrt(s.sum_sq / n - (s.sum / n) ** 2)
                    lines.append(f"Stdev #{i}: Total {n} Stdev {_fmt(r)}")
            for i, e in enumerate(self._extremes):
                if e.total:
                    lines.append(f"Extremity #{i}: Total {e.total} Min {e.min} Max {e.max}")
            for i, c in enumerate(self._correl):
                if c.total:
                    n = c.total
                    e1, e2 = c.sum1 / n, c.sum2 / n
                    num = c.sum12 / n - e1 * e2
                    den = _sqrt(c.sum1_sq / n - e1 * e1) * _sqrt(c.sum2_sq / n - e2 * e2)
                    lines.append(f"Correl. #{i}: Total {n} Coefficient {_fmt(_divide(num, den))}")
        return "\n".join(lines)

    def clear(self) -> None:
        """Reset every slot of every statistic."""
        with self._lock:
            self._hit = [_Hit() for _ in range(MAX_DEBUG_SLOTS)]
            self._mean = [_Mean() for _ in range(MAX_DEBUG_SLOTS)]
            self._stdev = [_Stdev() for _ in range(MAX_DEBUG_SLOTS)]
            self._extremes = [_Extremes() for _ in range(MAX_DEBUG_SLOTS)]
            self._correl = [_Correl() for _ in range(MAX_DEBUG_SLOTS)]