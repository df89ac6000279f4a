"""CLI command handlers and their registry.

Each command binds one operation to argparse: it declares its arguments,
reads and validates input files, calls the operation, and hands back results
for the CLI to persist or report.

Usage:
    @register_command("merge")
    class MergeCommand(BaseCommand):
        ...

    handler = get_command("merge")
    outcome = handler.run(args, settings)
"""

import argparse
import json
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, TypeVar

from pdfops import operations
from pdfops.config import Settings
from pdfops.exceptions import ConfigError
from pdfops.pages import parse_page_list
from pdfops.results import OperationResult
from pdfops.validation import validate_image_file, validate_pdf_file


@dataclass
class CommandOutcome:
    """What a command produced.

    Attributes:
        results: Documents to write to the output directory
        report: Key/value report for read-only commands
    """

    results: list[OperationResult] = field(default_factory=list)
    report: dict[str, Any] | None = None


class BaseCommand(ABC):
    """Abstract base class for all CLI commands."""

    # Set by @register_command decorator
    name: str = ""
    help: str = ""

    @classmethod
    @abstractmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Declare command-specific arguments."""

    @abstractmethod
    def run(self, args: argparse.Namespace, settings: Settings) -> CommandOutcome:
        """Execute the command.

        Args:
            args: Parsed command line
            settings: Loaded configuration

        Returns:
            CommandOutcome with written results or a report
        """


_COMMANDS: dict[str, type[BaseCommand]] = {}

C = TypeVar("C", bound=type[BaseCommand])


def register_command(name: str) -> Callable[[C], C]:
    """Class decorator registering a command under a name."""

    def decorator(cls: C) -> C:
        cls.name = name
        _COMMANDS[name] = cls
        return cls

    return decorator


def get_command(name: str) -> BaseCommand:
    """Get an instantiated command handler by name.

    Raises:
        ConfigError: If no command is registered for the name
    """
    if name not in _COMMANDS:
        available = ", ".join(list_commands())
        raise ConfigError(
            f"Unknown command: '{name}'. Available: {available}",
            context={"command": name},
        )
    return _COMMANDS[name]()


def list_commands() -> list[str]:
    """Get all registered command names, sorted."""
    return sorted(_COMMANDS)


def command_classes() -> dict[str, type[BaseCommand]]:
    """Registered command classes in registration order."""
    return dict(_COMMANDS)


def _add_output_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output directory (overrides config)",
    )


def _read_pdf(path: Path, settings: Settings) -> bytes:
    return validate_pdf_file(path, settings.input.max_file_size)


def _pages_arg(value: str | None) -> list[int] | None:
    return parse_page_list(value) if value else None


@register_command("merge")
class MergeCommand(BaseCommand):
    help = "Merge two or more PDFs in the given order"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("files", nargs="+", type=Path, help="PDF files to merge")
        _add_output_argument(parser)

    def run(self, args: argparse.Namespace, settings: Settings) -> CommandOutcome:
        documents = [_read_pdf(path, settings) for path in args.files]
        return CommandOutcome(results=[operations.merge(documents)])


@register_command("split")
class SplitCommand(BaseCommand):
    help = "Split a PDF into chunks of at most N pages"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("file", type=Path, help="PDF file to split")
        parser.add_argument(
            "-n", "--max-pages", type=int, required=True, help="Maximum pages per output file"
        )
        _add_output_argument(parser)

    def run(self, args: argparse.Namespace, settings: Settings) -> CommandOutcome:
        data = _read_pdf(args.file, settings)
        return CommandOutcome(results=operations.split(data, args.max_pages))


@register_command("extract")
class ExtractCommand(BaseCommand):
    help = "Extract an inclusive page range into a new PDF"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("file", type=Path, help="Source PDF file")
        parser.add_argument("--start", type=int, required=True, help="First page (1-based)")
        parser.add_argument("--end", type=int, required=True, help="Last page (1-based)")
        _add_output_argument(parser)

    def run(self, args: argparse.Namespace, settings: Settings) -> CommandOutcome:
        data = _read_pdf(args.file, settings)
        return CommandOutcome(results=[operations.extract(data, args.start, args.end)])


@register_command("remove")
class RemoveCommand(BaseCommand):
    help = "Remove pages from a PDF"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("file", type=Path, help="Source PDF file")
        parser.add_argument(
            "-p", "--pages", required=True, help="Pages to remove, e.g. '2' or '1,3,5-7'"
        )
        _add_output_argument(parser)

    def run(self, args: argparse.Namespace, settings: Settings) -> CommandOutcome:
        pages = parse_page_list(args.pages)
        data = _read_pdf(args.file, settings)
        return CommandOutcome(results=[operations.remove_pages(data, pages)])


@register_command("rotate")
class RotateCommand(BaseCommand):
    help = "Rotate pages by a multiple of 90 degrees"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("file", type=Path, help="Source PDF file")
        parser.add_argument(
            "-a", "--angle", type=int, required=True, help="Rotation in degrees (multiple of 90)"
        )
        parser.add_argument("-p", "--pages", help="Pages to rotate (default: all)")
        _add_output_argument(parser)

    def run(self, args: argparse.Namespace, settings: Settings) -> CommandOutcome:
        pages = _pages_arg(args.pages)
        data = _read_pdf(args.file, settings)
        return CommandOutcome(results=[operations.rotate(data, args.angle, pages)])


@register_command("set-metadata")
class SetMetadataCommand(BaseCommand):
    help = "Update document metadata; omitted fields are kept"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("file", type=Path, help="Source PDF file")
        for name in ("title", "author", "subject", "keywords", "creator"):
            parser.add_argument(f"--{name}", help=f"New {name}")
        _add_output_argument(parser)

    def run(self, args: argparse.Namespace, settings: Settings) -> CommandOutcome:
        patch = operations.MetadataPatch(
            title=args.title,
            author=args.author,
            subject=args.subject,
            keywords=args.keywords,
            creator=args.creator,
        )
        data = _read_pdf(args.file, settings)
        return CommandOutcome(results=[operations.update_metadata(data, patch)])


@register_command("number")
class NumberCommand(BaseCommand):
    help = "Stamp page numbers onto pages"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("file", type=Path, help="Source PDF file")
        parser.add_argument(
            "--position", help="top|bottom-left|center|right (default from config: bottom-center)"
        )
        parser.add_argument(
            "--format", dest="fmt", help="Template with {current}, {total}, {page}"
        )
        parser.add_argument("--start", type=int, help="First page to number (default: 1)")
        parser.add_argument("--end", type=int, help="Last page to number (default: last page)")
        _add_output_argument(parser)

    def run(self, args: argparse.Namespace, settings: Settings) -> CommandOutcome:
        data = _read_pdf(args.file, settings)
        result = operations.add_page_numbers(
            data,
            position=args.position,
            fmt=args.fmt,
            start_page=args.start,
            end_page=args.end,
            style=settings.page_numbers,
        )
        return CommandOutcome(results=[result])


@register_command("info")
class InfoCommand(BaseCommand):
    help = "Show page count, size, version and page dimensions"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("file", type=Path, help="PDF file to inspect")
        parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    def run(self, args: argparse.Namespace, settings: Settings) -> CommandOutcome:
        data = _read_pdf(args.file, settings)
        return CommandOutcome(report=asdict(operations.get_info(data)))


@register_command("metadata")
class MetadataCommand(BaseCommand):
    help = "Show document metadata"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("file", type=Path, help="PDF file to inspect")
        parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    def run(self, args: argparse.Namespace, settings: Settings) -> CommandOutcome:
        data = _read_pdf(args.file, settings)
        return CommandOutcome(report=asdict(operations.get_metadata(data)))


@register_command("images")
class ImagesCommand(BaseCommand):
    help = "Convert each image into a single-page PDF"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("files", nargs="+", type=Path, help="Image files")
        _add_output_argument(parser)

    def run(self, args: argparse.Namespace, settings: Settings) -> CommandOutcome:
        images = [
            operations.ImageSource(path.name, validate_image_file(path, settings.input.max_file_size))
            for path in args.files
        ]
        results = operations.convert_images(images, settings.images.page_size)
        return CommandOutcome(results=results)


def format_report(report: dict[str, Any], as_json: bool = False) -> list[str]:
    """Render a report as lines, either JSON or "key: value" pairs."""
    if as_json:
        return [json.dumps(report, indent=2, default=str)]

    lines = []
    for key, value in report.items():
        label = key.replace("_", " ")
        if isinstance(value, dict):
            inner = ", ".join(f"{k}={v}" for k, v in value.items())
            lines.append(f"{label}: {inner}")
        else:
            lines.append(f"{label}: {'-' if value is None else value}")
    return lines
