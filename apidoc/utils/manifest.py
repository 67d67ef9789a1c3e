"""Manifest and template metadata loading.

The manifest lists the source files to document; the template metadata
describes which templates render class pages and the package tree and
which resource directories are copied alongside them. Both are YAML
documents, and any problem with them aborts the run.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

TEMPLATE_METADATA_FILE = "template.yaml"


class ManifestError(ValueError):
    """Raised for a missing or malformed manifest or template metadata file."""


@dataclass
class ResourceCopy:
    """A resource directory copied into the output.

    Attributes:
        src: Directory relative to the template directory.
        dst: Directory relative to the output directory.
    """

    src: str
    dst: str


@dataclass
class TemplateMetadata:
    """Describes a template set.

    Attributes:
        template_dir: Directory holding the templates.
        class_template: Template rendering one class page.
        class_target_dir: Output subdirectory for class pages.
        tree_template: Template rendering the package tree.
        tree_target_file: Output file for the package tree.
        resources: Resource directories to copy.
    """

    template_dir: Path
    class_template: str
    class_target_dir: str
    tree_template: str
    tree_target_file: str
    resources: list[ResourceCopy] = field(default_factory=list)


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ManifestError(f"File not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"Expected a mapping at the top of {path}")
    return data


def _require(data: dict[str, Any], key: str, path: Path) -> Any:
    value = data.get(key)
    if value in (None, ""):
        raise ManifestError(f"Missing '{key}' in {path}")
    return value


def load_manifest(manifest_path: str) -> list[Path]:
    """Load the list of source files from a manifest.

    The manifest has the form ``{source: {files: [path, ...]}}``;
    relative paths are resolved against the manifest's directory.

    Args:
        manifest_path: Path to the manifest YAML file.

    Returns:
        Source file paths in manifest order.

    Raises:
        ManifestError: If the manifest is missing or malformed.
    """
    path = Path(manifest_path)
    data = _read_yaml(path)
    source = _require(data, "source", path)
    if not isinstance(source, dict):
        raise ManifestError(f"'source' must be a mapping in {path}")
    files = _require(source, "files", path)
    if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
        raise ManifestError(f"'source.files' must be a list of paths in {path}")

    resolved = [path.parent / f for f in files]
    logger.info("Loaded manifest %s (%d files)", path, len(resolved))
    return resolved


def load_template_metadata(template_dir: str) -> TemplateMetadata:
    """Load the template metadata of a template directory.

    Args:
        template_dir: Directory containing ``template.yaml``.

    Returns:
        The parsed template metadata.

    Raises:
        ManifestError: If the metadata is missing or malformed.
    """
    root = Path(template_dir)
    path = root / TEMPLATE_METADATA_FILE
    data = _read_yaml(path)

    class_section = _require(data, "class", path)
    tree_section = _require(data, "tree", path)
    if not isinstance(class_section, dict) or not isinstance(tree_section, dict):
        raise ManifestError(f"'class' and 'tree' must be mappings in {path}")

    resources = []
    for entry in data.get("resources") or []:
        if not isinstance(entry, dict):
            raise ManifestError(f"Resource entries must be mappings in {path}")
        resources.append(
            ResourceCopy(
                src=str(_require(entry, "src", path)),
                dst=str(_require(entry, "dst", path)),
            )
        )

    return TemplateMetadata(
        template_dir=root,
        class_template=str(_require(class_section, "template", path)),
        class_target_dir=str(class_section.get("target_dir", ".")),
        tree_template=str(_require(tree_section, "template", path)),
        tree_target_file=str(_require(tree_section, "target_file", path)),
        resources=resources,
    )
