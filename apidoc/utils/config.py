"""Configuration loader for the API documentation builder.

Loads settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"


@dataclass
class ScannerConfig:
    """Configuration for source scanning."""

    encoding: str = "utf-8"
    extensions: list[str] = field(default_factory=lambda: [".js"])
    exclude_patterns: list[str] = field(default_factory=list)
    function_keyword: str = "function"


@dataclass
class HierarchyConfig:
    """Configuration for inheritance resolution."""

    component_class: str = "Ext.Component"
    inherit_from_excluded: bool = False


@dataclass
class LinksConfig:
    """Configuration for inline link rendering and summaries."""

    short_description_length: int = 117
    ellipsis: str = "..."
    page_extension: str = "html"


@dataclass
class OutputConfig:
    """Configuration for documentation output."""

    output_dir: str = "docs/api"
    template_dir: Optional[str] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    hierarchy: HierarchyConfig = field(default_factory=HierarchyConfig)
    links: LinksConfig = field(default_factory=LinksConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_scanner_config(data: dict) -> ScannerConfig:
    """Build a ScannerConfig from a dictionary.

    Args:
        data: Dictionary with scanner settings.

    Returns:
        A configured ScannerConfig instance.
    """
    return ScannerConfig(
        encoding=data.get("encoding", "utf-8"),
        extensions=data.get("extensions", [".js"]),
        exclude_patterns=data.get("exclude_patterns", []),
        function_keyword=data.get("function_keyword", "function"),
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded configuration from %s", path)

    hierarchy_data = raw.get("hierarchy", {})
    hierarchy_config = HierarchyConfig(
        component_class=hierarchy_data.get("component_class", "Ext.Component"),
        inherit_from_excluded=hierarchy_data.get("inherit_from_excluded", False),
    )

    links_data = raw.get("links", {})
    links_config = LinksConfig(
        short_description_length=links_data.get("short_description_length", 117),
        ellipsis=links_data.get("ellipsis", "..."),
        page_extension=links_data.get("page_extension", "html"),
    )

    output_data = raw.get("output", {})
    output_config = OutputConfig(
        output_dir=output_data.get("output_dir", "docs/api"),
        template_dir=output_data.get("template_dir"),
    )

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        format=logging_data.get(
            "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ),
        file=logging_data.get("file"),
    )

    return AppConfig(
        scanner=_build_scanner_config(raw.get("scanner", {})),
        hierarchy=hierarchy_config,
        links=links_config,
        output=output_config,
        logging=logging_config,
    )
