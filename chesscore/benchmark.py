"""Command lists for the ``bench`` and ``benchmark`` commands."""

from __future__ import annotations

import os
import re
import struct
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Union

from chesscore.positions import benchmark_games, default_fens

# Hash size in MB per thread, chosen so that about half the hash is in use
# once every position of the current sequence has been searched.
TT_SIZE_PER_THREAD = 128
DEFAULT_DURATION_S = 150

_INT_PREFIX = re.compile(r"[+-]?\d+")
_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1

Args = Union[str, Iterable[str], None]


def _tokens(args: Args) -> Iterator[str]:
    if args is None:
        return iter(())
    if isinstance(args, str):
        return iter(args.split())
    return (word for arg in args for word in str(arg).split())


class _IntReader:
    """Reads integers from words the way formatted stream extraction does.

    The first failed read puts the reader in a failed state; every later read
    fails too. A word with trailing text yields its numeric prefix and leaves
    the rest as the next input.
    """

    def __init__(self, args: Args) -> None:
        self._words = _tokens(args)
        self._pending: Optional[str] = None
        self._failed = False

    def read(self) -> Optional[int]:
        if self._failed:
            return None
        word = self._pending if self._pending is not None else next(self._words, None)
        self._pending = None
        if word is None:
            self._failed = True
            return None
        match = _INT_PREFIX.match(word)
        if not match:
            self._failed = True
            return None
        value = int(match.group())
        if not _INT32_MIN <= value <= _INT32_MAX:
            self._failed = True
            return None
        rest = word[match.end():]
        if rest:
            self._pending = rest
        return value


def _f32(x: float) -> float:
    return struct.unpack("f", struct.pack("f", x))[0]


def _corrected_time(ply: int) -> float:
    # Time per move fitted roughly on long time-control games:
    # ms = 50000 / (ply + 15), so the 10th move gets 2000 ms.
    return 50000.0 / (float(ply) + 15.0)


def _hardware_concurrency() -> int:
    return os.cpu_count() or 1


def setup_bench(current_fen: str, args: Args = None) -> List[str]:
    """Build the list of UCI commands run by ``bench``.

    ``args`` holds up to five words: hash size in MB, thread count, limit
    value, FEN source (``default``, ``current`` or a file name) and limit type
    (``depth``, ``perft``, ``nodes``, ``movetime`` or ``eval``). Missing words
    take the defaults ``16 1 13 default depth``. Raises OSError when the FEN
    file cannot be read.
    """
    words = _tokens(args)
    tt_size = next(words, "16")
    threads = next(words, "1")
    limit = next(words, "13")
    fen_file = next(words, "default")
    limit_type = next(words, "depth")

    go = "eval" if limit_type == "eval" else f"go {limit_type} {limit}"

    if fen_file == "default":
        fens = default_fens()
    elif fen_file == "current":
        fens = [current_fen]
    else:
        with open(fen_file, "r", encoding="utf-8", newline="") as handle:
            content = handle.read()
        fens = [line for line in content.split("\n") if line]

    commands = [
        f"setoption name Threads value {threads}",
        f"setoption name Hash value {tt_size}",
        "ucinewgame",
    ]
    for fen in fens:
        if "setoption" in fen:
            commands.append(fen)
        else:
            commands.append(f"position fen {fen}")
            commands.append(go)
    return commands


@dataclass
class BenchmarkSetup:
    """Settings and command list of a ``benchmark`` run."""

    tt_size: int = 0
    threads: int = 0
    commands: List[str] = field(default_factory=list)
    original_invocation: str = ""
    filled_invocation: str = ""


def setup_benchmark(args: Args = None) -> BenchmarkSetup:
    """Build the ``benchmark`` run from up to three integers.

    The words are the thread count, the hash size in MB and the desired total
    duration in seconds. Missing or unreadable values default to the number
    of processors, 128 MB per thread and 150 seconds.
    """
    reader = _IntReader(args)
    setup = BenchmarkSetup()

    threads = reader.read()
    if threads is None:
        setup.threads = _hardware_concurrency()
    else:
        setup.threads = threads
        setup.original_invocation += str(threads)

    tt_size = reader.read()
    if tt_size is None:
        setup.tt_size = TT_SIZE_PER_THREAD * setup.threads
    else:
        setup.tt_size = tt_size
        setup.original_invocation += f" {tt_size}"

    desired = reader.read()
    if desired is None:
        desired = DEFAULT_DURATION_S
    else:
        setup.original_invocation += f" {desired}"

    setup.filled_invocation = f"{setup.threads} {setup.tt_size} {desired}"

    games = benchmark_games()

    total_time = 0.0
    for game in games:
        setup.commands.append("ucinewgame")
        for ply, _ in enumerate(game, start=1):
            total_time = _f32(total_time + _f32(_corrected_time(ply)))

    scale = _f32(_f32(float(desired * 1000)) / total_time)

    for game in games:
        setup.commands.append("ucinewgame")
        for ply, fen in enumerate(game, start=1):
            setup.commands.append(f"position fen {fen}")
            setup.commands.append(f"go movetime {int(_corrected_time(ply) * scale)}")

    return setup