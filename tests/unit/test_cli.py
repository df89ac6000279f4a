"""Tests for pdfops.cli module."""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import yaml

from pdfops.cli import cmd_validate, create_parser, main
from pdfops.logging_config import setup_logging


class TestCreateParser:
    """Test argument parser creation."""

    def test_parser_creation(self):
        parser = create_parser()
        assert parser.prog == "pdfops"

    def test_version_flag(self):
        args = create_parser().parse_args(["-V"])
        assert args.version is True

    def test_config_flag(self):
        args = create_parser().parse_args(["--config", "test.yaml"])
        assert args.config == Path("test.yaml")

    def test_validate_flag(self):
        args = create_parser().parse_args(["--validate"])
        assert args.validate is True
        assert args.command is None

    def test_verbosity(self):
        args = create_parser().parse_args(["-vv", "info", "a.pdf"])
        assert args.verbose == 2

    def test_subcommand(self):
        args = create_parser().parse_args(["split", "a.pdf", "--max-pages", "3"])
        assert args.command == "split"
        assert args.file == Path("a.pdf")
        assert args.max_pages == 3

    def test_number_format_dest(self):
        args = create_parser().parse_args(["number", "a.pdf", "--format", "{page}"])
        assert args.fmt == "{page}"


class TestCmdValidate:
    """Test config validation command."""

    def test_requires_config(self):
        assert cmd_validate(None) == 1

    def test_valid(self, temp_config_file, caplog):
        with caplog.at_level(logging.INFO, logger="pdfops"):
            setup_logging()
            assert cmd_validate(temp_config_file) == 0
        assert "valid" in caplog.text

    def test_missing_file(self, temp_dir):
        assert cmd_validate(temp_dir / "missing.yaml") == 1

    def test_structural_error(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("page_numbers:\n  font_size: 0\n")
        assert cmd_validate(path) == 1

    def test_semantic_error(self, temp_dir):
        path = temp_dir / "bad_font.yaml"
        path.write_text("page_numbers:\n  font_name: Wingdings\n")
        assert cmd_validate(path) == 1

    def test_malformed_dimension(self, temp_dir, caplog):
        path = temp_dir / "bad_size.yaml"
        path.write_text("images:\n  page_size: [\".mm\", 10in]\n")
        with caplog.at_level(logging.ERROR, logger="pdfops"):
            setup_logging()
            assert cmd_validate(path) == 1
        assert "Configuration error" in caplog.text

    def test_warning_still_passes(self, temp_dir, caplog):
        path = temp_dir / "warn.yaml"
        path.write_text("page_numbers:\n  position: middle\n")
        with caplog.at_level(logging.WARNING, logger="pdfops"):
            setup_logging()
            assert cmd_validate(path) == 0
        assert "not recognized" in caplog.text


class TestMain:
    """Test main CLI entry point."""

    def test_version_returns_0(self, caplog):
        with caplog.at_level(logging.INFO, logger="pdfops"):
            assert main(["--version"]) == 0
        assert "pdfops" in caplog.text

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_validate_dispatch(self, temp_config_file):
        with patch("pdfops.cli.cmd_validate", return_value=0) as mock_validate:
            assert main(["-c", str(temp_config_file), "--validate"]) == 0
        mock_validate.assert_called_once_with(temp_config_file)

    def test_writes_results(self, temp_pdf, temp_dir):
        out = temp_dir / "out"
        assert main(["extract", str(temp_pdf), "--start", "1", "--end", "2", "-o", str(out)]) == 0
        files = list(out.glob("extractedPages_*.pdf"))
        assert len(files) == 1

    def test_output_dir_from_config(self, temp_pdf, temp_dir):
        out = temp_dir / "configured"
        config_path = temp_dir / "config.yaml"
        config_path.write_text(yaml.dump({"output": {"output_dir": str(out)}}))
        assert main(["-c", str(config_path), "rotate", str(temp_pdf), "--angle", "90"]) == 0
        assert len(list(out.glob("rotated_*.pdf"))) == 1

    def test_json_report(self, temp_pdf, capsys):
        assert main(["-q", "info", str(temp_pdf), "--json"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["page_count"] == 6
        assert report["all_pages_same_dimension"] is True

    def test_plain_report(self, temp_pdf, capsys):
        assert main(["-q", "metadata", str(temp_pdf)]) == 0
        assert "title: -" in capsys.readouterr().out

    def test_validation_error_returns_1(self, temp_pdf, temp_dir):
        assert main(["extract", str(temp_pdf), "--start", "5", "--end", "9", "-o", str(temp_dir)]) == 1

    def test_missing_input_returns_1(self, temp_dir):
        assert main(["info", str(temp_dir / "missing.pdf")]) == 1

    def test_missing_config_returns_1(self, temp_pdf, temp_dir):
        assert main(["-c", str(temp_dir / "nope.yaml"), "info", str(temp_pdf)]) == 1

    def test_error_logged(self, temp_dir, caplog):
        with caplog.at_level(logging.ERROR, logger="pdfops"):
            main(["info", str(temp_dir / "missing.pdf")])
        assert "File not found" in caplog.text

    def test_malformed_dimension_returns_1(self, temp_dir):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("images:\n  page_size: [1.2.3mm, 10in]\n")
        assert main(["-c", str(config_path), "--validate"]) == 1

    def test_unknown_font_rejected_before_running(self, temp_pdf, temp_dir, caplog):
        config_path = temp_dir / "config.yaml"
        config_path.write_text(yaml.dump({"page_numbers": {"font_name": "Wingdings"}}))
        out = temp_dir / "out"
        with patch("pdfops.operations.add_page_numbers") as mock_number:
            with caplog.at_level(logging.ERROR, logger="pdfops"):
                rc = main(["-c", str(config_path), "number", str(temp_pdf), "-o", str(out)])
        assert rc == 1
        assert "Configuration error" in caplog.text
        assert "Wingdings" in caplog.text
        mock_number.assert_not_called()
        assert not out.exists()

    def test_bad_font_color_rejected(self, temp_pdf, temp_dir, caplog):
        config_path = temp_dir / "config.yaml"
        config_path.write_text(yaml.dump({"page_numbers": {"font_color": "not-a-color"}}))
        with caplog.at_level(logging.ERROR, logger="pdfops"):
            rc = main(["-c", str(config_path), "number", str(temp_pdf), "-o", str(temp_dir)])
        assert rc == 1
        assert "font_color" in caplog.text
