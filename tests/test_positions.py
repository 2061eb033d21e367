from chesscore.positions import benchmark_games, default_fens

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def _board_is_valid(board: str) -> bool:
    ranks = board.split("/")
    if len(ranks) != 8:
        return False
    for rank in ranks:
        width = 0
        for c in rank:
            if c.isdigit():
                width += int(c)
            elif c in "pnbrqkPNBRQK":
                width += 1
            else:
                return False
        if width != 8:
            return False
    return True


def _fen_part(entry: str) -> str:
    return entry.split(" moves ")[0]


def test_defaults_start_and_end_with_chess960_off():
    fens = default_fens()
    assert fens[0] == "setoption name UCI_Chess960 value false"
    assert fens[-1] == "setoption name UCI_Chess960 value false"
    assert fens[1] == START_FEN


def test_defaults_switch_chess960_on_before_960_positions():
    fens = default_fens()
    on = fens.index("setoption name UCI_Chess960 value true")
    assert "bbqnnrkr/pppppppp/8/8/8/8/PPPPPPPP/BBQNNRKR w HFhf - 0 1 moves g2g3 d7d5 d2d4 c8h3 c1g5 e8d6 g5e7 f7f6" in fens[on:]
    assert "nqbnrkrb/pppppppp/8/8/8/8/PPPPPPPP/NQBNRKRB w KQkq - 0 1" in fens[on:]


def test_defaults_contain_positions_with_moves():
    fens = default_fens()
    assert "2K5/p7/7P/5pR1/8/5k2/r7/8 w - - 0 1 moves g5g6 f3e3 g6g5 e3f3" in fens
    assert "8/8/8/8/8/6k1/6p1/6K1 w - -" in fens


def test_default_fens_have_valid_boards():
    for entry in default_fens():
        if entry.startswith("setoption"):
            continue
        fields = _fen_part(entry).split()
        assert _board_is_valid(fields[0]), entry
        assert fields[1] in ("w", "b"), entry


def test_default_fens_returns_independent_copy():
    first = default_fens()
    first.clear()
    assert default_fens()[1] == START_FEN


def test_benchmark_games_first_and_last_positions():
    games = benchmark_games()
    assert len(games) == 5
    assert games[0][0] == "rnbq1k1r/ppp1bppp/4pn2/8/2B5/2NP1N2/PPP2PPP/R1BQR1K1 b - - 2 8"
    assert games[-1][-1] == "8/8/5pk1/7p/3K3P/8/R4N1r/4b3 b - - 2 64"


def test_each_game_keeps_one_side_to_move():
    for game in benchmark_games():
        sides = {fen.split()[1] for fen in game}
        assert len(sides) == 1


def test_each_game_has_consecutive_move_numbers():
    for game in benchmark_games():
        numbers = [int(fen.split()[5]) for fen in game]
        assert numbers == list(range(numbers[0], numbers[0] + len(numbers)))


def test_benchmark_positions_have_valid_boards_and_one_king_each():
    for game in benchmark_games():
        for fen in game:
            board = fen.split()[0]
            assert _board_is_valid(board), fen
            assert board.count("K") == 1 and board.count("k") == 1, fen


def test_benchmark_games_returns_independent_copy():
    games = benchmark_games()
    games[0].clear()
    games.clear()
    fresh = benchmark_games()
    assert len(fresh) == 5
    assert fresh[0][0].endswith(" 8")