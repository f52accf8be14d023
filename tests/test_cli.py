"""Tests for the command line interface and its exit statuses."""

import json

import pytest

from splitbill.cli import build_parser, main
from splitbill.errors import ArgumentError


class TestArgumentParsing:
    """Tests for --input / --output handling."""

    def test_parses_equals_form(self):
        args = build_parser().parse_args(["--input=bill.json", "--output=out.json"])
        assert args.input == "bill.json"
        assert args.output == "out.json"

    def test_parses_space_form(self):
        args = build_parser().parse_args(["--input", "in/", "--output", "out/"])
        assert args.input == "in/"
        assert args.output == "out/"

    def test_missing_output_raises(self):
        with pytest.raises(ArgumentError):
            build_parser().parse_args(["--input=bill.json"])

    def test_missing_output_exit_status(self, capsys):
        assert main(["--input=bill.json"]) == 2
        assert "--output" in capsys.readouterr().err

    def test_no_arguments_exit_status(self):
        assert main([]) == 2

    def test_empty_input_exit_status(self, tmp_path, capsys):
        assert main(["--input=", f"--output={tmp_path / 'out'}"]) == 2
        assert "must not be empty" in capsys.readouterr().err
        assert not (tmp_path / "out").exists()

    def test_empty_output_exit_status(self, tmp_path, write_json, raw_bill, capsys):
        source = write_json(tmp_path / "bill.json", raw_bill)
        assert main([f"--input={source}", "--output="]) == 2
        assert "must not be empty" in capsys.readouterr().err


class TestSingleFile:
    """Tests for single file runs."""

    def test_success(self, tmp_path, write_json, raw_bill, capsys):
        source = write_json(tmp_path / "bill.json", raw_bill)
        target = tmp_path / "out" / "result.json"

        status = main([f"--input={source}", f"--output={target}"])

        assert status == 0
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["date"] == "2024年3月21日"
        assert data["totalAmount"] == pytest.approx(126.5)
        assert "Processed" in capsys.readouterr().out

    def test_missing_input_file(self, tmp_path):
        status = main([f"--input={tmp_path / 'missing.json'}", f"--output={tmp_path / 'out.json'}"])
        assert status == 3

    def test_malformed_json(self, tmp_path):
        source = tmp_path / "bill.json"
        source.write_text("[1, 2", encoding="utf-8")

        status = main([f"--input={source}", f"--output={tmp_path / 'out.json'}"])

        assert status == 5

    def test_invalid_bill_lists_issues(self, tmp_path, write_json, raw_bill, capsys):
        raw_bill["tipPercentage"] = -1
        source = write_json(tmp_path / "bill.json", raw_bill)

        status = main([f"--input={source}", f"--output={tmp_path / 'out.json'}"])

        assert status == 5
        assert "tipPercentage" in capsys.readouterr().err


class TestBatch:
    """Tests for directory runs."""

    def test_batch_with_failure_still_succeeds(self, tmp_path, write_json, raw_bill, capsys):
        input_dir = tmp_path / "input"
        write_json(input_dir / "good.json", raw_bill)
        (input_dir / "bad.json").write_text("nope", encoding="utf-8")
        output_dir = tmp_path / "output"

        status = main([f"--input={input_dir}", f"--output={output_dir}"])

        captured = capsys.readouterr()
        assert status == 0
        assert "2 files processed" in captured.out
        assert "1 failed" in captured.out
        assert "bad.json" in captured.err
        assert (output_dir / "good.json").exists()

    def test_empty_directory(self, tmp_path, capsys):
        input_dir = tmp_path / "input"
        input_dir.mkdir()

        status = main([f"--input={input_dir}", f"--output={tmp_path / 'output'}"])

        assert status == 0
        assert "No JSON files found" in capsys.readouterr().out
