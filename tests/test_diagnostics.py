# tests/test_diagnostics.py

from newmoon.cli import main as cli_main
from newmoon.diagnostics import round_trip


def test_round_trip_main_passes(capsys):
    assert round_trip.main(["--N", "200"]) == 0
    assert "All round-trip tests passed." in capsys.readouterr().out

def test_round_trip_counts_no_failures_across_cutover():
    start = round_trip.parse_date("1500-01-01")
    end = round_trip.parse_date("1700-01-01")
    assert round_trip.roundtrip_test(300, start, end, seed=7, max_failures=5) == 0

def test_round_trip_through_cli(capsys):
    assert cli_main(["diag", "round-trip", "--N", "50", "--seed", "1"]) == 0
    assert "All round-trip tests passed." in capsys.readouterr().out
