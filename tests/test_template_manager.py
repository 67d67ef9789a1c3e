"""Tests for the Jinja2 template manager."""

import pytest
from jinja2 import TemplateNotFound

from apidoc.generators.doc_builder import DocBuilder, DocModel
from apidoc.generators.template_manager import DEFAULT_TEMPLATE_DIR, TemplateManager
from apidoc.utils.manifest import TemplateMetadata, load_template_metadata

SOURCE = """\
/**
 * @class Ext.Component
 * Base component.
 */
/**
 * @cfg {String} id The component id
 */
/**
 * @class Ext.Panel
 * @extends Ext.Component
 * A panel with a {@link #title}.
 * @constructor
 * @param {Object} config The config object
 */
/**
 * @property title
 * The panel title
 * @type String
 */
/**
 * Sets the title.
 * @param {String} title The new title
 * @return {Ext.Panel} this
 */
setTitle: function(title) {},
/**
 * @event render
 * Fires after render.
 * @param {Ext.Panel} this
 */
"""


@pytest.fixture
def model() -> DocModel:
    """Build a small model with a parent and a child class."""
    builder = DocBuilder()
    builder.add_source(SOURCE, "Panel.js")
    return builder.build()


@pytest.fixture
def manager() -> TemplateManager:
    """Create a TemplateManager for the built-in template set."""
    return TemplateManager(load_template_metadata(str(DEFAULT_TEMPLATE_DIR)))


class TestTemplateManagerInit:
    """Tests for TemplateManager initialization."""

    def test_default_templates_dir(self) -> None:
        assert DEFAULT_TEMPLATE_DIR.exists()

    def test_list_templates(self, manager: TemplateManager) -> None:
        templates = manager.list_templates()
        assert "class.html.j2" in templates
        assert "tree.html.j2" in templates

    def test_custom_template_set(self, tmp_path, model: DocModel) -> None:
        (tmp_path / "page.j2").write_text("{{ cls.class_name }}|{{ page_extension }}")
        (tmp_path / "tree.j2").write_text("{{ model.classes | length }}")
        metadata = TemplateMetadata(
            template_dir=tmp_path,
            class_template="page.j2",
            class_target_dir=".",
            tree_template="tree.j2",
            tree_target_file="index.txt",
        )
        manager = TemplateManager(metadata, page_extension="htm")
        assert manager.render_class(model.get("Ext.Panel"), model) == "Ext.Panel|htm"
        assert manager.render_tree(model.tree, model) == "2"

    def test_missing_template_raises(self, tmp_path, model: DocModel) -> None:
        metadata = TemplateMetadata(
            template_dir=tmp_path,
            class_template="nope.j2",
            class_target_dir=".",
            tree_template="tree.j2",
            tree_target_file="index.html",
        )
        with pytest.raises(TemplateNotFound):
            TemplateManager(metadata).render_class(model.get("Ext.Panel"), model)


class TestClassPage:
    """Tests for the built-in class page."""

    def test_header_and_hierarchy(
        self, manager: TemplateManager, model: DocModel
    ) -> None:
        page = manager.render_class(model.get("Ext.Panel"), model)
        assert "<h1>Panel <small>Ext.Panel</small></h1>" in page
        assert '<a href="Ext.Component.html">Component</a>' in page
        assert "Panel.js" in page

    def test_members_rendered(self, manager: TemplateManager, model: DocModel) -> None:
        page = manager.render_class(model.get("Ext.Panel"), model)
        assert 'id="Ext.Panel-title"' in page
        assert 'id="Ext.Panel-setTitle"' in page
        assert 'id="Ext.Panel-render"' in page
        assert "Constructor" in page
        assert "Returns: this" in page

    def test_inherited_member_marked(
        self, manager: TemplateManager, model: DocModel
    ) -> None:
        page = manager.render_class(model.get("Ext.Panel"), model)
        assert 'id="Ext.Panel-id" class="inherited"' in page

    def test_subclasses_listed_on_parent(
        self, manager: TemplateManager, model: DocModel
    ) -> None:
        page = manager.render_class(model.get("Ext.Component"), model)
        assert "Subclasses" in page
        assert '<a href="Ext.Panel.html">Panel</a>' in page

    def test_inline_link_rendered(
        self, manager: TemplateManager, model: DocModel
    ) -> None:
        page = manager.render_class(model.get("Ext.Panel"), model)
        assert 'href="Ext.Panel.html#Ext.Panel-title"' in page


class TestTreePage:
    """Tests for the built-in package tree page."""

    def test_tree_links_class_pages(
        self, manager: TemplateManager, model: DocModel
    ) -> None:
        page = manager.render_tree(model.tree, model)
        assert '<li class="package">Ext' in page
        assert 'href="output/Ext.Panel.html"' in page
        assert "2 classes" in page
