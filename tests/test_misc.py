import os
import statistics
from datetime import datetime

import pytest

from chesscore.misc import (
    DebugStats,
    engine_info,
    engine_version_info,
    get_binary_directory,
    get_working_directory,
    is_whitespace,
    read_file_to_string,
    remove_whitespace,
    str_to_size_t,
)


def test_version_info_format():
    version = engine_version_info()
    name, _, rest = version.partition(" ")
    assert name != ""
    assert rest.startswith("dev-")
    assert rest.endswith("-nogit")
    assert len(rest) == len("dev-YYYYMMDD-nogit")
    date_text = rest[len("dev-"):len("dev-") + 8]
    parsed = datetime.strptime(date_text, "%Y%m%d")
    assert parsed.strftime("%Y%m%d") == date_text


def test_engine_info_variants():
    version = engine_version_info()
    uci = engine_info(True)
    plain = engine_info(False)
    assert uci.startswith(version + "\nid author ")
    assert plain.startswith(version + " by ")
    assert uci.split("\nid author ")[1] == plain.split(" by ", 1)[1]


def test_remove_whitespace():
    assert remove_whitespace(" a\tb\nc \r\v\fd ") == "abcd"
    assert remove_whitespace("") == ""


def test_is_whitespace():
    assert is_whitespace(" \t\n\r")
    assert is_whitespace("")
    assert not is_whitespace(" x ")


def test_str_to_size_t_parses_prefix():
    assert str_to_size_t("42") == 42
    assert str_to_size_t("  17abc") == 17
    assert str_to_size_t("+8") == 8
    assert str_to_size_t("18446744073709551615") == 2**64 - 1


def test_str_to_size_t_negative_wraps():
    assert str_to_size_t("-1") == 2**64 - 1


def test_str_to_size_t_errors():
    with pytest.raises(ValueError):
        str_to_size_t("abc")
    with pytest.raises(ValueError):
        str_to_size_t("")
    with pytest.raises(OverflowError):
        str_to_size_t(str(2**64))


def test_read_file_round_trip(tmp_path):
    data = b"\x00\x01binary\r\ndata\xff"
    path = tmp_path / "blob.bin"
    path.write_bytes(data)
    assert read_file_to_string(path) == data
    assert read_file_to_string(str(tmp_path / "missing.bin")) is None


def test_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert get_working_directory() == os.getcwd()


def test_binary_directory_with_path():
    assert get_binary_directory("/opt/tools/engine") == "/opt/tools/"
    assert get_binary_directory("C:\\tools\\engine.exe") == "C:\\tools\\"


def test_binary_directory_bare_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert get_binary_directory("engine") == os.getcwd() + os.sep


def test_binary_directory_dot_prefix(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    argv0 = "." + os.sep + "bin" + os.sep + "engine"
    assert get_binary_directory(argv0) == os.getcwd() + os.sep + "bin" + os.sep


def test_hit_rate_report():
    stats = DebugStats()
    for cond in (True, True, False, True):
        stats.hit_on(cond)
    assert stats.report() == "Hit #0: Total 4 Hits 3 Hit Rate (%) 75"


def test_mean_report():
    stats = DebugStats()
    stats.mean_of(2, 1)
    stats.mean_of(4, 1)
    assert stats.report() == "Mean #1: Total 2 Mean 3"


def test_stdev_report_matches_population_stdev():
    stats = DebugStats()
    values = [2, 4, 4, 4, 5, 5, 7, 9]
    for v in values:
        stats.stdev_of(v, 3)
    line = stats.report()
    assert line.startswith(f"Stdev #3: Total {len(values)} Stdev ")
    reported = float(line.rsplit(" ", 1)[1])
    assert reported == pytest.approx(statistics.pstdev(values), rel=1e-5)


def test_extremes_report():
    stats = DebugStats()
    for v in (5, -12, 40, 7):
        stats.extremes_of(v, 2)
    assert stats.report() == "Extremity #2: Total 4 Min -12 Max 40"


def test_correl_of_linear_values():
    stats = DebugStats()
    for x in range(1, 6):
        stats.correl_of(x, 3 * x + 2, 5)
    line = stats.report()
    assert line.startswith("Correl. #5: Total 5 Coefficient ")
    assert float(line.rsplit(" ", 1)[1]) == pytest.approx(1.0)


def test_report_order_and_clear():
    stats = DebugStats()
    stats.correl_of(1, 2, 0)
    stats.hit_on(True, 4)
    stats.mean_of(10, 0)
    lines = stats.report().splitlines()
    assert [line.split(" ")[0] for line in lines] == ["Hit", "Mean", "Correl."]
    stats.clear()
    assert stats.report() == ""


@pytest.mark.parametrize("slot", [-1, 32, 100])
def test_invalid_slot(slot):
    stats = DebugStats()
    with pytest.raises(IndexError):
        stats.hit_on(True, slot)
    with pytest.raises(IndexError):
        stats.correl_of(1, 2, slot)
    assert stats.report() == ""