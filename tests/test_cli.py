"""Tests for the timetable2iCal command line entry point."""

from __future__ import annotations

import json

import pytest
from icalendar import Calendar

import timetable2iCal

from test_loader import CS1010


@pytest.fixture()
def inputs(tmp_path):
    modules = tmp_path / "modules.json"
    modules.write_text(json.dumps([CS1010]), encoding="utf-8")
    selection = tmp_path / "selection.json"
    selection.write_text(json.dumps({"CS1010": {"Lecture": "1", "Tutorial": "03"}}), encoding="utf-8")
    calendar = tmp_path / "calendar.json"
    calendar.write_text(
        json.dumps({"academicYear": "2024/2025", "holidays": ["2024-10-31"]}), encoding="utf-8"
    )
    return modules, selection, calendar


def run(monkeypatch, *args):
    monkeypatch.setattr("sys.argv", ["timetable2iCal.py", *args])
    timetable2iCal.main()


class TestMain:
    def test_writes_calendar(self, monkeypatch, inputs, tmp_path, capsys):
        modules, selection, calendar = inputs
        output = tmp_path / "out"
        run(
            monkeypatch,
            "--modules", str(modules),
            "--timetable", str(selection),
            "--semester", "1",
            "--config", str(calendar),
            "-o", str(output),
        )

        written = Calendar.from_ical((tmp_path / "out.ics").read_bytes())
        summaries = [str(event["summary"]) for event in written.walk("VEVENT")]
        assert summaries == ["CS1010 Lecture", "CS1010 Tutorial", "CS1010 Exam"]
        assert written["x-wr-timezone"] == "Asia/Singapore"
        assert "Found 3 calendar events." in capsys.readouterr().out

    def test_hidden_module(self, monkeypatch, inputs, tmp_path, capsys):
        modules, selection, calendar = inputs
        run(
            monkeypatch,
            "--modules", str(modules),
            "--timetable", str(selection),
            "--semester", "1",
            "--config", str(calendar),
            "--hide", "CS1010",
            "-o", str(tmp_path / "out.ics"),
        )
        assert "Warning: No events found." in capsys.readouterr().out

    def test_missing_academic_calendar_entry(self, monkeypatch, inputs, tmp_path, capsys):
        modules, selection, _ = inputs
        with pytest.raises(SystemExit) as exc:
            run(
                monkeypatch,
                "--modules", str(modules),
                "--timetable", str(selection),
                "--semester", "1",
                "--academic-year", "1999/2000",
                "-o", str(tmp_path / "out.ics"),
            )
        assert exc.value.code == 1
        assert "No academic calendar entry" in capsys.readouterr().err

    def test_missing_file(self, monkeypatch, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            run(
                monkeypatch,
                "--modules", str(tmp_path / "missing.json"),
                "--timetable", str(tmp_path / "selection.json"),
                "--semester", "1",
            )
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err
