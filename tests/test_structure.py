"""Tests for documentation data models and serialization."""

import json

import pytest

from apidoc.parsers.structure import (
    ClassRef,
    Description,
    DocCfg,
    DocClass,
    DocEvent,
    DocMember,
    DocMethod,
    DocProperty,
    DocSet,
    Param,
    split_class_name,
)


class TestSplitClassName:
    """Tests for split_class_name."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Ext.data.Store", ("Ext.data", "Store")),
            ("Ext.Panel", ("Ext", "Panel")),
            ("Ext", ("", "Ext")),
        ],
    )
    def test_split(self, name: str, expected: tuple[str, str]) -> None:
        assert split_class_name(name) == expected


class TestDocMember:
    """Tests for member models."""

    def test_simple_name(self) -> None:
        assert DocMember(name="Ext.Panel.prototype.show").simple_name == "show"
        assert DocMember(name="show").simple_name == "show"

    def test_defaults(self) -> None:
        member = DocProperty(name="title")
        assert member.hide is False
        assert member.is_static is False
        assert member.description == Description()

    def test_cfg_to_dict(self) -> None:
        cfg = DocCfg(
            name="title",
            class_name="Ext.Panel",
            short_class_name="Panel",
            type="String",
            optional=True,
        )
        d = cfg.to_dict()
        assert d["name"] == "title"
        assert d["type"] == "String"
        assert d["optional"] is True
        assert d["description"] == {"long": "", "short": None}

    def test_method_to_dict(self) -> None:
        method = DocMethod(
            name="setTitle",
            params=[Param(name="title", type="String")],
            return_type="Ext.Panel",
            return_description=Description("this"),
        )
        d = method.to_dict()
        assert d["params"][0]["name"] == "title"
        assert d["return_type"] == "Ext.Panel"
        assert d["return_description"] == {"long": "this", "short": None}

    def test_event_to_dict_is_json_serializable(self) -> None:
        event = DocEvent(name="show", params=[Param(name="panel")])
        json.dumps(event.to_dict())


class TestDocClass:
    """Tests for DocClass."""

    def test_names_split_on_creation(self) -> None:
        cls = DocClass(class_name="Ext.grid.GridPanel")
        assert cls.short_class_name == "GridPanel"
        assert cls.package_name == "Ext.grid"

    def test_ref(self) -> None:
        assert DocClass(class_name="Ext.Panel").ref() == ClassRef("Ext.Panel", "Panel")

    def test_to_dict_omits_arena_fields(self) -> None:
        cls = DocClass(class_name="Ext.Panel", parent_index=3, excluded=True)
        d = cls.to_dict()
        assert "parent_index" not in d
        assert "excluded" not in d
        assert d["constructor_description"] is None

    def test_to_dict_nested(self) -> None:
        cls = DocClass(
            class_name="Ext.Panel",
            cfgs=[DocCfg(name="title")],
            super_classes=[ClassRef("Ext.Component", "Component")],
        )
        d = cls.to_dict()
        assert d["cfgs"][0]["name"] == "title"
        assert d["super_classes"] == [
            {"class_name": "Ext.Component", "short_class_name": "Component"}
        ]
        json.dumps(d)


class TestDocSet:
    """Tests for DocSet collection."""

    def test_add_routes_by_type(self) -> None:
        docs = DocSet()
        docs.add(DocClass(class_name="A"))
        docs.add(DocCfg(name="c"))
        docs.add(DocProperty(name="p"))
        docs.add(DocMethod(name="m"))
        docs.add(DocEvent(name="e"))
        assert len(docs.classes) == 1
        assert [c.name for c in docs.cfgs] == ["c"]
        assert [p.name for p in docs.properties] == ["p"]
        assert [m.name for m in docs.methods] == ["m"]
        assert [e.name for e in docs.events] == ["e"]

    def test_add_rejects_unknown(self) -> None:
        with pytest.raises(TypeError):
            DocSet().add(DocMember(name="plain"))

    def test_extend_preserves_order(self) -> None:
        first = DocSet(methods=[DocMethod(name="a")])
        second = DocSet(methods=[DocMethod(name="b")])
        first.extend(second)
        assert [m.name for m in first.methods] == ["a", "b"]
