"""Template manager for rendering documentation pages with Jinja2.

Provides a centralized interface for rendering class pages and the
package tree from the templates named in a template set's metadata.
"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

from apidoc.analysis.package_tree import PackageNode
from apidoc.generators.doc_builder import DocModel
from apidoc.parsers.structure import DocClass
from apidoc.utils.manifest import TemplateMetadata

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates" / "default"


class TemplateManager:
    """Loads and renders the Jinja2 templates of a template set.

    Templates receive the resolved model objects directly; they must not
    modify them.
    """

    def __init__(self, metadata: TemplateMetadata, page_extension: str = "html") -> None:
        """Initialize the template manager.

        Args:
            metadata: Template set description.
            page_extension: Extension of rendered class pages, exposed to
                templates for cross-page links.
        """
        self.metadata = metadata
        self.page_extension = page_extension

        if not metadata.template_dir.exists():
            logger.warning("Templates directory not found: %s", metadata.template_dir)

        self._env = Environment(
            loader=FileSystemLoader(str(metadata.template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.globals["page_extension"] = page_extension
        self._env.globals["class_target_dir"] = metadata.class_target_dir
        logger.debug("Template manager initialized with: %s", metadata.template_dir)

    def render_class(self, cls: DocClass, model: DocModel) -> str:
        """Render the page of one class.

        Args:
            cls: The resolved class.
            model: The full model, for parent and cross-class lookups.

        Returns:
            Rendered page content.
        """
        return self._render(
            self.metadata.class_template,
            cls=cls,
            parent=model.parent(cls),
            model=model,
        )

    def render_tree(self, tree: PackageNode, model: DocModel) -> str:
        """Render the package tree page.

        Args:
            tree: Root of the package tree.
            model: The full model.

        Returns:
            Rendered page content.
        """
        return self._render(self.metadata.tree_template, tree=tree, model=model)

    def _render(self, template_name: str, **kwargs: Any) -> str:
        """Render a template with the given context variables.

        Args:
            template_name: Name of the template file to render.
            **kwargs: Template context variables.

        Returns:
            Rendered template string.

        Raises:
            TemplateNotFound: If the template file does not exist.
        """
        template = self._env.get_template(template_name)
        rendered = template.render(**kwargs)
        logger.debug("Rendered template %s (%d chars)", template_name, len(rendered))
        return rendered

    def list_templates(self) -> list[str]:
        """List all available template files.

        Returns:
            List of template file names.
        """
        return self._env.list_templates()
