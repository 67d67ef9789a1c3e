"""Documentation site writer.

Copies the template set's static resources, writes one rendered page
per class plus the package tree page, and can dump the resolved model
as JSON.
"""

import json
import logging
import shutil
from pathlib import Path

from apidoc.generators.doc_builder import DocModel
from apidoc.generators.template_manager import TemplateManager

logger = logging.getLogger(__name__)


class SiteWriter:
    """Writes rendered documentation into an output directory."""

    def __init__(self, output_dir: str, templates: TemplateManager) -> None:
        """Initialize the site writer.

        Args:
            output_dir: Root directory for generated output.
            templates: Template manager of the selected template set.
        """
        self.output_dir = Path(output_dir)
        self.templates = templates

    @property
    def class_dir(self) -> Path:
        """Directory receiving the class pages."""
        return self.output_dir / self.templates.metadata.class_target_dir

    def page_path(self, class_name: str) -> Path:
        """Path of the rendered page for a class."""
        return self.class_dir / f"{class_name}.{self.templates.page_extension}"

    def write(self, model: DocModel) -> Path:
        """Write resources, class pages and the tree page.

        Args:
            model: The resolved documentation model.

        Returns:
            The output directory.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.class_dir.mkdir(parents=True, exist_ok=True)
        self.copy_resources()

        for cls in model.classes:
            logger.info("Saving: %s", cls.class_name)
            content = self.templates.render_class(cls, model)
            self.page_path(cls.class_name).write_text(content, encoding="utf-8")

        tree_path = self.output_dir / self.templates.metadata.tree_target_file
        tree_path.parent.mkdir(parents=True, exist_ok=True)
        tree_path.write_text(
            self.templates.render_tree(model.tree, model), encoding="utf-8"
        )

        logger.info(
            "Wrote documentation to %s (%d classes)",
            self.output_dir,
            len(model.classes),
        )
        return self.output_dir

    def copy_resources(self) -> list[Path]:
        """Copy the template set's resource directories into the output.

        Returns:
            Destination directories that were written.

        Raises:
            FileNotFoundError: If a resource directory does not exist.
        """
        metadata = self.templates.metadata
        copied = []
        for resource in metadata.resources:
            src = metadata.template_dir / resource.src
            dst = self.output_dir / resource.dst
            if not src.is_dir():
                raise FileNotFoundError(f"Resource directory not found: {src}")
            shutil.copytree(src, dst, dirs_exist_ok=True)
            logger.debug("Copied resources %s -> %s", src, dst)
            copied.append(dst)
        return copied


def write_model_json(model: DocModel, output_file: str) -> Path:
    """Write the resolved model as indented JSON.

    Args:
        model: The resolved documentation model.
        output_file: Destination file path.

    Returns:
        Path to the written file.
    """
    path = Path(output_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(model_to_json(model), encoding="utf-8")
    logger.info("Wrote model JSON: %s", path)
    return path


def model_to_json(model: DocModel) -> str:
    """Serialize the model to a JSON string with stable key order."""
    return json.dumps(model.to_dict(), indent=2, sort_keys=True)
