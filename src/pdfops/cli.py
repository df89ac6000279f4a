"""Command-line interface for pdfops."""

import argparse
import sys
from pathlib import Path

from pdfops import __version__
from pdfops.commands import command_classes, format_report, get_command
from pdfops.config import Settings, load_config
from pdfops.exceptions import ConfigError, PdfOpsError
from pdfops.logging_config import get_logger, setup_logging
from pdfops.validation import SettingsValidator, validate_settings

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pdfops",
        description="Merge, split, extract, rotate, number and inspect PDF documents.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pdfops merge a.pdf b.pdf -o ./out             Merge in the given order
  pdfops split report.pdf --max-pages 10        Split into 10-page chunks
  pdfops remove report.pdf --pages 2,5-7        Remove pages 2, 5, 6 and 7
  pdfops rotate scan.pdf --angle 90 --pages 1   Rotate the first page
  pdfops -c config.yaml number report.pdf       Stamp page numbers
  pdfops info report.pdf --json                 Show structural info as JSON
  pdfops -c config.yaml --validate              Validate config only
""",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version information and exit",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration file and exit",
    )

    # Logging options
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v also shows pypdf warnings, -vv for debug)",
    )

    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress all output except errors",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write logs to file (includes all levels)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    for name, command_cls in command_classes().items():
        subparser = subparsers.add_parser(name, help=command_cls.help)
        command_cls.add_arguments(subparser)

    return parser


def cmd_validate(config_path: Path | None) -> int:
    """Load and check a configuration file."""
    if not config_path:
        logger.error("--validate requires --config")
        return 1

    try:
        settings = load_config(config_path)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except FileNotFoundError:
        logger.error("Configuration file not found: %s", config_path)
        return 1

    logger.info("Configuration syntax is valid: %s", config_path)
    result = validate_settings(settings)
    for warning in result.warnings:
        logger.warning("  %s", warning)
    for error in result.errors:
        logger.error("  %s", error)

    if not result.valid:
        logger.error("Validation failed with %d error(s)", len(result.errors))
        return 1
    if result.warnings:
        logger.info("Validation passed with %d warning(s)", len(result.warnings))
    return 0


def run_command(parsed: argparse.Namespace, settings: Settings) -> int:
    """Run the selected command and persist or print what it produced."""
    command = get_command(parsed.command)
    outcome = command.run(parsed, settings)

    if outcome.report is not None:
        for line in format_report(outcome.report, as_json=getattr(parsed, "json", False)):
            # Reports are the command's output, so they bypass quiet mode
            print(line)
        return 0

    output_dir = getattr(parsed, "output", None) or settings.output.output_dir
    for result in outcome.results:
        path = result.write_to(output_dir)
        logger.info("  -> %s (%d pages, %d bytes)", path, result.page_count, result.size)
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    setup_logging(
        verbosity=parsed.verbose,
        quiet=parsed.quiet,
        log_file=parsed.log_file,
    )

    # Handle --version
    if parsed.version:
        logger.info("pdfops %s", __version__)
        return 0

    # Handle --validate
    if parsed.validate:
        return cmd_validate(parsed.config)

    if not parsed.command:
        parser.print_help()
        return 1

    try:
        if parsed.config:
            settings = load_config(parsed.config)
            SettingsValidator().validate_or_raise(settings)
        else:
            settings = Settings()
        return run_command(parsed, settings)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except FileNotFoundError as e:
        logger.error("File not found: %s", e)
        return 1
    except PdfOpsError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
