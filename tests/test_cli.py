"""Tests for the nearsky command line."""

from __future__ import annotations

import sys

import pytest

from nearsky.cli import main as cli_main


def test_positions_for_fixed_jde(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """positions prints formatted RA/Dec for the requested bodies."""
    monkeypatch.setattr(
        sys, 'argv', ['nearsky', 'positions', '--jde', '2448976.5', 'venus', '2']
    )
    rc = cli_main.main()
    out = capsys.readouterr().out
    assert rc == 0
    assert 'JDE 2448976.500000' in out
    assert 'Venus' in out and '21h 04m 4' in out
    assert 'Mars' in out and '07h 48m 3' in out


def test_positions_moon_phase_line(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """The Moon gets an extra line with distance and phase."""
    monkeypatch.setattr(sys, 'argv', ['nearsky', 'positions', '--jde', '2448976.5', 'moon'])
    assert cli_main.main() == 0
    out = capsys.readouterr().out
    assert 'lit (waning)' in out
    assert 'distance 3784' in out


def test_positions_topocentric(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """--lat/--lon accept sexagesimal and compass forms."""
    monkeypatch.delenv('NEARSKY_GEOCENTRIC', raising=False)
    monkeypatch.setattr(
        sys,
        'argv',
        ['nearsky', 'positions', '--jd', '2448976.5', '--lat', '34:03N', '--lon', '118 15 W', 'sun'],
    )
    assert cli_main.main() == 0
    assert 'Sun' in capsys.readouterr().out


def test_positions_requires_lat_and_lon_together(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Only one of --lat/--lon is an error."""
    monkeypatch.setattr(sys, 'argv', ['nearsky', 'positions', '--lat', '40', 'moon'])
    assert cli_main.main() == 1
    assert 'Error:' in capsys.readouterr().err


def test_positions_bad_time(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """An unparseable --time reports an error and exits 1."""
    monkeypatch.setattr(sys, 'argv', ['nearsky', 'positions', '--time', 'yesterday-ish'])
    assert cli_main.main() == 1
    assert 'Invalid date/time' in capsys.readouterr().err


def test_positions_rejects_unknown_body(monkeypatch: pytest.MonkeyPatch) -> None:
    """argparse rejects unknown bodies with exit status 2."""
    monkeypatch.setattr(sys, 'argv', ['nearsky', 'positions', 'earth'])
    with pytest.raises(SystemExit) as exc:
        cli_main.main()
    assert exc.value.code == 2


def test_orbits_for_fixed_jde(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """orbits prints one element row per requested body."""
    monkeypatch.setattr(sys, 'argv', ['nearsky', 'orbits', '--jde', '2451545.0', 'earth', '8'])
    assert cli_main.main() == 0
    out = capsys.readouterr().out
    assert 'Earth' in out
    assert 'Pluto' in out
