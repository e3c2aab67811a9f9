"""Tests for the diff-noise-filter command line"""

import io
import logging
import sys

import pytest

import cli
from services.logging_setup import setup_logging

HEADER = """diff --git a/ash/shell.cc b/ash/shell.cc
index 28c373b242560..75f0f75e738a2 100644
--- a/ash/shell.cc
+++ b/ash/shell.cc
"""

NOISE_HUNK = """@@ -27,8 +27,8 @@ void Shell::OnEvent(ui::Event* event) {
   if (event->type() ==
-      ui::ET_KEY_RELEASED)
+      ui::EventType::kKeyReleased)
     return;
"""

REAL_HUNK = """@@ -50,3 +50,4 @@ void Shell::Init() {
   InitLayout();
+  InitAccelerators();
 }
"""


@pytest.fixture
def stdin(monkeypatch):
    def feed(text):
        monkeypatch.setattr(sys, "stdin", io.StringIO(text))

    return feed


def test_filters_stdin_to_stdout(stdin, capsys):
    stdin(HEADER + NOISE_HUNK + REAL_HUNK)

    assert cli.main([]) == 0
    assert capsys.readouterr().out == HEADER + REAL_HUNK


def test_fully_elided_diff_prints_nothing(stdin, capsys):
    stdin(HEADER + NOISE_HUNK)

    assert cli.main([]) == 0
    assert capsys.readouterr().out == ""


def test_no_filter_round_trips(stdin, capsys):
    stdin(HEADER + NOISE_HUNK + REAL_HUNK)

    assert cli.main(["--no-filter"]) == 0
    assert capsys.readouterr().out == HEADER + NOISE_HUNK + REAL_HUNK


def test_parse_error_exits_nonzero_without_output(stdin, capsys):
    stdin(HEADER + "@@ -1 +1 @@\n-a\n*b\n+c\n")

    assert cli.main([]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("ERROR: Unexpected line")


def test_file_input_and_output(tmp_path, capsys):
    source = tmp_path / "change.diff"
    target = tmp_path / "filtered.diff"
    source.write_bytes((HEADER + NOISE_HUNK + REAL_HUNK).replace("\n", "\r\n").encode())

    assert cli.main([str(source), "--output", str(target)]) == 0
    assert capsys.readouterr().out == ""
    # CRLF survives the trip through the files untouched
    assert target.read_bytes() == (HEADER + REAL_HUNK).replace("\n", "\r\n").encode()


def test_missing_input_file(tmp_path, capsys):
    assert cli.main([str(tmp_path / "nope.diff")]) == 2
    assert "file not found" in capsys.readouterr().err


def test_stats_are_logged_to_stderr(stdin, capsys):
    stdin(HEADER + NOISE_HUNK + REAL_HUNK)

    assert cli.main(["--stats", "--log-level", "warning"]) == 0
    captured = capsys.readouterr()
    assert captured.out == HEADER + REAL_HUNK
    assert "Elided 1 of 2 changed blocks; kept 1/2 hunks in 1/1 files" in captured.err


def test_bad_level_in_config_file_does_not_break_the_run(isolated_config, stdin, capsys):
    isolated_config.mkdir(parents=True, exist_ok=True)
    (isolated_config / "config.json").write_text('{"logging": {"level": "chatty"}}')
    stdin(HEADER + NOISE_HUNK + REAL_HUNK)

    assert cli.main([]) == 0
    assert capsys.readouterr().out == HEADER + REAL_HUNK


def test_logging_covers_app_run_as_script():
    setup_logging("INFO")

    script_logger = logging.getLogger("__main__")
    assert script_logger.level == logging.INFO
    assert script_logger.handlers
