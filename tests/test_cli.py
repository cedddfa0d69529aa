# tests/test_cli.py

import pytest

from hijricalc.cli import main


def test_day(capsys):
    assert main(["day", "1975-05-06", "--type", "islamic-civil"]) == 0
    out = capsys.readouterr().out
    assert "1975-05-06  ->  24 Rabi' II 1395 AH  [islamic-civil]" in out


def test_date_shorthand(capsys):
    assert main(["2024-03-11"]) == 0
    assert "1 Ramadan 1445 AH  [islamic]" in capsys.readouterr().out


def test_day_debug(capsys):
    assert main(["day", "1975-05-06", "--type", "islamic-tbla", "--debug"]) == 0
    out = capsys.readouterr().out
    assert "25 Rabi' II 1395" in out
    assert "month_length: 29" in out


def test_to_gregorian(capsys):
    assert main(["to-gregorian", "1395", "4", "24", "--type", "islamic-civil"]) == 0
    assert capsys.readouterr().out.strip() == "1975-05-06"


@pytest.mark.parametrize("argv", [["to-gregorian", "1395", "13", "1"], ["to-gregorian", "1395", "2", "30", "--type", "islamic-civil"]])
def test_to_gregorian_rejects(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


def test_types(capsys):
    assert main(["types"]) == 0
    out = capsys.readouterr().out
    for name in ("islamic", "islamic-civil", "islamic-umalqura", "islamic-tbla"):
        assert name in out
    assert "UmmAlQuraArithmetic" in out


def test_month_table(capsys):
    assert main(["month-table", "1445", "--types", "islamic-civil,islamic-umalqura"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("AH 1445")
    assert "Ramadan" in out


def test_moon_age(capsys):
    assert main(["moon-age", "2024-03-25T07:00"]) == 0
    out = capsys.readouterr().out
    assert "moon age" in out


def test_diag_round_trip(capsys):
    assert main(["diag", "round-trip", "--types", "islamic-civil,islamic-umalqura", "--N", "200"]) == 0
    out = capsys.readouterr().out
    assert "200/200 ok" in out


def test_unknown_command():
    with pytest.raises(SystemExit):
        main(["sunrise"])
