"""Tests for the command line entry point."""

import io
import json

import pytest

from timeboard.cli import build_parser, main, run_interactive


def write_script(tmp_path, *lines):
    path = tmp_path / "commands.txt"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class TestArguments:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert (args.mode, args.file, args.output) == ("interactive", None, "text")

    def test_help_documents_interactive_default(self):
        text = " ".join(build_parser().format_help().split())
        assert "no arguments start the interactive prompt" in text

    def test_headless_requires_file(self):
        with pytest.raises(SystemExit) as exc:
            main(["--mode", "headless"])
        assert exc.value.code == 2

    def test_gui_not_available(self, capsys):
        assert main(["--mode", "gui"]) == 2
        assert "not available" in capsys.readouterr().err


class TestHeadless:
    def test_runs_script(self, tmp_path, capsys):
        script = write_script(
            tmp_path,
            "# morning routine",
            "create calendar --name Work --timezone America/New_York",
            "use calendar --name Work",
            "",
            "create event Standup from 2024-03-26T09:00 to 2024-03-26T09:15",
            "print events on 2024-03-26",
            "exit",
            "print events on 2024-03-27",
        )
        assert main(["--mode", "headless", str(script)]) == 0
        out = capsys.readouterr().out
        assert "Calendar 'Work' created" in out
        assert "  - Standup - 2024-03-26T09:00 to 2024-03-26T09:15" in out
        assert "2024-03-27" not in out

    def test_failed_command_does_not_stop_script(self, tmp_path, capsys):
        script = write_script(
            tmp_path,
            "use calendar --name Missing",
            "create event Standup from 2024-03-26T09:00 to 2024-03-26T09:15",
            "exit",
        )
        assert main(["--mode", "headless", str(script)]) == 0
        out = capsys.readouterr().out
        assert "Error:" in out
        assert "Event 'Standup' created." in out

    def test_missing_file(self, tmp_path):
        assert main(["--mode", "headless", str(tmp_path / "missing.txt")]) == 1

    def test_export_failure_stops_with_status_one(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file", encoding="utf-8")
        script = write_script(tmp_path, f"export cal {blocker / 'out.csv'}", "exit")
        assert main(["--mode", "headless", str(script)]) == 1

    def test_missing_exit_still_succeeds(self, tmp_path):
        script = write_script(tmp_path, "print events on 2024-03-26")
        assert main(["--mode", "headless", str(script)]) == 0

    def test_json_output(self, tmp_path, capsys):
        script = write_script(
            tmp_path,
            "create event Standup from 2024-03-26T09:00 to 2024-03-26T09:15 at \"Room A\"",
            "print events on 2024-03-26",
            "exit",
        )
        assert main(["--mode", "headless", str(script), "--output", "json"]) == 0
        payloads = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert payloads[0]["ok"] is True
        (event,) = payloads[1]["events"]
        assert event["subject"] == "Standup"
        assert event["start"] == "2024-03-26T09:00:00"
        assert event["location"] == "Room A"
        assert payloads[2]["exit_requested"] is True


class TestInteractive:
    def test_reads_until_exit(self, executor):
        source = io.StringIO(
            "create event Standup from 2024-03-26T09:00 to 2024-03-26T09:15\n\nshow status on 2024-03-26T09:05\nexit\nshow status on 2024-03-26T09:05\n"
        )
        output = io.StringIO()
        assert run_interactive(executor, source=source, stream=output) == 0
        assert output.getvalue().splitlines() == ["Event 'Standup' created.", "Busy", "Exiting."]

    def test_stops_at_end_of_input(self, executor):
        output = io.StringIO()
        assert run_interactive(executor, source=io.StringIO("print events on 2024-03-26\n"), stream=output) == 0
        assert output.getvalue() == "No events on 2024-03-26.\n"
