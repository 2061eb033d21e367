# chesscore

Building blocks for a chess engine, written in plain Python with no
third-party dependencies.

- `chesscore.bitboard`: 64-bit square sets (squares 0..63, a1 = 0, h8 = 63),
  shifts, pawn attacks, king and knight attacks, bishop/rook/queen attacks
  looked up through magic bitboards, line and between masks, and a text
  board printer.
- `chesscore.benchmark`: builds the list of UCI commands for a `bench` run
  and for a timed `benchmark` run.
- `chesscore.positions`: the default bench FEN list and five recorded game
  sequences used by the timed benchmark.
- `chesscore.utils`: a xorshift64* generator (`PRNG`), `mul_hi64`, `split`
  and `move_to_front`.
- `chesscore.misc`: version strings, white-space and number-parsing helpers,
  file and path helpers, and the `DebugStats` counters.

## Installation

```
pip install .
```

## Usage

### Bitboards

The attack tables are built on first use; `init()` builds them ahead of time
(later calls reuse the tables already built).

```python
from chesscore import bitboard as bb

bb.init()

e4 = bb.make_square(4, 3)
blocker = bb.square_bb(bb.make_square(4, 5))
attacks = bb.attacks_bb(bb.PieceType.ROOK, e4, blocker)
print(bb.popcount(attacks))
print(bb.pretty(attacks))

for square in bb.iter_squares(bb.pseudo_attacks(bb.PieceType.KNIGHT, e4)):
    print(square)

print(bb.between_bb(e4, bb.make_square(4, 7)))   # e5, e6, e7, e8
print(bb.line_bb(e4, bb.make_square(7, 6)))      # the b1-h7 diagonal
```

Other helpers include `shift`, `pawn_attacks_bb`, `pawn_attacks`, `lsb`,
`msb`, `least_significant_square_bb`, `more_than_one`, `rank_bb`, `file_bb`,
`distance`, `file_distance`, `rank_distance`, `edge_distance` and
`sliding_attack` (a ray walk that does not use the tables). Functions given a
square outside 0..63 raise `ValueError`, as do `lsb`/`msb` on an empty
bitboard.

### Benchmark command lists

```python
from chesscore.benchmark import setup_bench, setup_benchmark

start = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
commands = setup_bench(start, ["16", "1", "10"])
print(commands[:5])

setup = setup_benchmark(["4", "512", "60"])
print(setup.threads, setup.tt_size, len(setup.commands))
print(setup.original_invocation, "|", setup.filled_invocation)
```

`setup_bench(current_fen, args)` takes up to five words, in order: hash size
in MB, thread count, limit value, FEN source (`default`, `current` or a file
path) and limit type (`depth`, `nodes`, `movetime`, `perft` or `eval`).
Missing words default to `16 1 13 default depth`. A FEN file is read line by
line, skipping empty lines; an unreadable file raises `OSError`.

`setup_benchmark(args)` takes up to three integers: thread count, hash size
in MB and total duration in seconds. Missing values default to the number of
processors, 128 MB per thread and 150 seconds. It returns a `BenchmarkSetup`
with `threads`, `tt_size`, `commands`, `original_invocation` and
`filled_invocation`; the `go movetime` values are spread over the game
positions so that they add up to about the requested duration.

Both functions accept a single string, an iterable of strings, or `None`.

### Debug statistics

```python
from chesscore.misc import DebugStats

stats = DebugStats()
for value in (1, 2, 3):
    stats.mean_of(value, 0)
stats.hit_on(True, 1)
print(stats.report())
stats.clear()
```

`DebugStats` offers `hit_on`, `mean_of`, `stdev_of`, `extremes_of` and
`correl_of` over 32 slots (an out-of-range slot raises `IndexError`);
`report()` returns the lines as a string.

### Other helpers

- `misc.engine_version_info()` gives `Chesscore dev-YYYYMMDD-nogit`, and
  `misc.engine_info(to_uci)` adds the author line.
- `misc.str_to_size_t`, `misc.remove_whitespace`, `misc.is_whitespace`.
- `misc.read_file_to_string(path)` returns the file's bytes, or `None`.
- `misc.get_working_directory()` and `misc.get_binary_directory(argv0)`.

## What this package does not do

There is no board position, move generator, evaluation, search, time
management or UCI command loop here, and no program to run. `benchmark`
only produces lists of command strings; nothing in the package carries them
out.

## Running the tests

```
pip install .[test]
pytest
```