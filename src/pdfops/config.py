"""Configuration loading for pdfops."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from pdfops.constants import (
    DEFAULT_FONT_COLOR,
    DEFAULT_FONT_NAME,
    DEFAULT_FONT_SIZE,
    DEFAULT_IMAGE_PAGE_SIZE,
    DEFAULT_PAGE_NUMBER_FORMAT,
    DEFAULT_POSITION,
    MAX_FILE_SIZE,
)
from pdfops.exceptions import ConfigError
from pdfops.units import parse_page_size


@dataclass
class PageNumberStyle:
    """Defaults and typography for page-number overlays.

    Supports placeholders in format:
      - {current} / {page}: Current page number (1-indexed)
      - {total}: Total page count
    """
    position: str = DEFAULT_POSITION  # "top-left", "bottom-center", ...
    format: str = DEFAULT_PAGE_NUMBER_FORMAT
    font_name: str = DEFAULT_FONT_NAME  # PDF standard font
    font_size: int = DEFAULT_FONT_SIZE
    font_color: str = DEFAULT_FONT_COLOR  # Name or hex code


@dataclass
class ImageSettings:
    """Image-to-PDF conversion settings."""
    page_size: str | tuple[str | float, str | float] = DEFAULT_IMAGE_PAGE_SIZE

    @property
    def page_dimensions(self) -> tuple[float, float]:
        return parse_page_size(self.page_size)


@dataclass
class InputSettings:
    """Limits applied to files read by the CLI."""
    max_file_size: int = MAX_FILE_SIZE  # bytes


@dataclass
class OutputSettings:
    """Where the CLI writes results."""
    output_dir: Path = Path("./output")


@dataclass
class Settings:
    """Root configuration object."""
    version: int = 1
    page_numbers: PageNumberStyle = field(default_factory=PageNumberStyle)
    images: ImageSettings = field(default_factory=ImageSettings)
    input: InputSettings = field(default_factory=InputSettings)
    output: OutputSettings = field(default_factory=OutputSettings)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config section, insisting it is a mapping."""
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a mapping",
            context={"section": name},
        )
    return section


def _positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(
            f"'{field_name}' must be a positive integer, got {value!r}",
            context={"field": field_name},
        )
    return value


def parse_page_numbers(data: dict[str, Any]) -> PageNumberStyle:
    """Parse the page_numbers section."""
    return PageNumberStyle(
        position=str(data.get("position", DEFAULT_POSITION)),
        format=str(data.get("format", DEFAULT_PAGE_NUMBER_FORMAT)),
        font_name=str(data.get("font_name", DEFAULT_FONT_NAME)),
        font_size=_positive_int(data.get("font_size", DEFAULT_FONT_SIZE), "page_numbers.font_size"),
        font_color=str(data.get("font_color", DEFAULT_FONT_COLOR)),
    )


def parse_images(data: dict[str, Any]) -> ImageSettings:
    """Parse the images section, resolving the page size eagerly."""
    page_size = data.get("page_size", DEFAULT_IMAGE_PAGE_SIZE)
    if isinstance(page_size, list):
        page_size = tuple(page_size)

    try:
        parse_page_size(page_size)
    except ConfigError as e:
        raise ConfigError(
            f"Invalid images.page_size: {e}",
            context={"field": "images.page_size"},
        ) from e
    return ImageSettings(page_size=page_size)


def settings_from_dict(data: dict[str, Any]) -> Settings:
    """Build Settings from an already-parsed YAML mapping."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a YAML dictionary")

    input_data = _section(data, "input")
    output_data = _section(data, "output")

    return Settings(
        version=data.get("version", 1),
        page_numbers=parse_page_numbers(_section(data, "page_numbers")),
        images=parse_images(_section(data, "images")),
        input=InputSettings(
            max_file_size=_positive_int(
                input_data.get("max_file_size", MAX_FILE_SIZE), "input.max_file_size"
            ),
        ),
        output=OutputSettings(
            output_dir=Path(output_data.get("output_dir", "./output")),
        ),
    )


def load_config(config_path: Path) -> Settings:
    """Load and validate a configuration file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        return Settings()
    return settings_from_dict(data)
