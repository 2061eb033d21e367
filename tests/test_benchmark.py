import pytest

from chesscore.benchmark import BenchmarkSetup, setup_bench, setup_benchmark
from chesscore.positions import benchmark_games, default_fens

START = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def test_setup_bench_defaults_header():
    commands = setup_bench(START, "")
    assert commands[:3] == [
        "setoption name Threads value 1",
        "setoption name Hash value 16",
        "ucinewgame",
    ]


def test_setup_bench_default_positions():
    commands = setup_bench(START)
    fens = default_fens()
    setoptions = [f for f in fens if "setoption" in f]
    positions = [f for f in fens if "setoption" not in f]
    assert len(commands) == 3 + len(setoptions) + 2 * len(positions)
    assert commands[3] == fens[0]
    assert commands[4] == "position fen " + fens[1]
    assert commands[5] == "go depth 13"
    assert commands[-1] == fens[-1]


def test_setup_bench_current_with_arguments():
    commands = setup_bench(START, ["64", "4", "5000", "current", "movetime"])
    assert commands == [
        "setoption name Threads value 4",
        "setoption name Hash value 64",
        "ucinewgame",
        "position fen " + START,
        "go movetime 5000",
    ]


def test_setup_bench_eval_limit_type():
    commands = setup_bench(START, "16 1 1 current eval")
    assert commands[-1] == "eval"
    assert commands[-2] == "position fen " + START


def test_setup_bench_reads_fen_file(tmp_path):
    path = tmp_path / "fens.txt"
    path.write_text("8/8/8/8/8/6k1/6p1/6K1 w - -\n\n7k/7P/6K1/8/3B4/8/8/8 b - -\n")
    commands = setup_bench(START, f"16 1 5 {path} perft")
    assert commands[3:] == [
        "position fen 8/8/8/8/8/6k1/6p1/6K1 w - -",
        "go perft 5",
        "position fen 7k/7P/6K1/8/3B4/8/8/8 b - -",
        "go perft 5",
    ]


def test_setup_bench_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        setup_bench(START, f"16 1 5 {tmp_path / 'missing.txt'} depth")


def test_setup_benchmark_explicit_values():
    setup = setup_benchmark("4 512 30")
    assert setup.threads == 4
    assert setup.tt_size == 512
    assert setup.original_invocation == "4 512 30"
    assert setup.filled_invocation == "4 512 30"


def test_setup_benchmark_default_hash_follows_threads():
    setup = setup_benchmark(["3"])
    assert setup.tt_size == 128 * 3
    assert setup.original_invocation == "3"
    assert setup.filled_invocation == "3 384 150"


def test_setup_benchmark_bad_token_uses_defaults():
    setup = setup_benchmark("x 5 6")
    assert setup.original_invocation == ""
    assert setup.threads >= 1
    assert setup.tt_size == 128 * setup.threads
    assert setup.filled_invocation.endswith(" 150")


def test_setup_benchmark_command_layout():
    setup = setup_benchmark("1 16 60")
    games = benchmark_games()
    assert isinstance(setup, BenchmarkSetup)
    assert setup.commands[: len(games)] == ["ucinewgame"] * len(games)
    total_positions = sum(len(g) for g in games)
    assert len(setup.commands) == 2 * len(games) + 2 * total_positions
    rest = setup.commands[len(games):]
    assert rest[0] == "ucinewgame"
    assert rest[1] == "position fen " + games[0][0]
    assert rest[2].startswith("go movetime ")


def test_setup_benchmark_movetimes_sum_to_duration():
    desired = 60
    setup = setup_benchmark(f"1 16 {desired}")
    times = [int(c.split()[-1]) for c in setup.commands if c.startswith("go movetime ")]
    assert all(t > 0 for t in times)
    assert sum(times) <= desired * 1000 + 1
    assert sum(times) >= desired * 1000 - len(times) - 1


def test_setup_benchmark_movetimes_decrease_within_game():
    setup = setup_benchmark("1 16 150")
    first_game = len(benchmark_games()[0])
    times = [int(c.split()[-1]) for c in setup.commands if c.startswith("go movetime ")]
    game_times = times[:first_game]
    assert game_times == sorted(game_times, reverse=True)
    assert game_times[0] > game_times[-1]