"""Data models for documented classes and their members.

Defines dataclasses for classes, configs, properties, methods, events
and parameters. These models form the shared vocabulary between the
comment classifier, the hierarchy builder and the page renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Description:
    """Rendered description of an entity.

    Attributes:
        long: Full description with inline links expanded to markup.
        short: One-line plain-text summary, or None when not needed.
    """

    long: str = ""
    short: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this description.
        """
        return {"long": self.long, "short": self.short}


@dataclass
class Param:
    """A parameter of a class constructor, method or event.

    Attributes:
        name: Parameter name.
        type: Declared type, if any.
        description: Rendered parameter description.
        optional: Whether the parameter is optional.
    """

    name: str
    type: Optional[str] = None
    description: Description = field(default_factory=Description)
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this parameter.
        """
        return {
            "name": self.name,
            "type": self.type,
            "description": self.description.to_dict(),
            "optional": self.optional,
        }


@dataclass
class DocMember:
    """Attributes shared by configs, properties, methods and events.

    Attributes:
        name: Member name as documented (may be dotted).
        class_name: Fully qualified name of the owning class.
        short_class_name: Owning class name without its package.
        description: Rendered description.
        hide: Whether the member is hidden from resolved output.
        is_static: Whether the member is static (never inherited).
    """

    name: str
    class_name: str = ""
    short_class_name: str = ""
    description: Description = field(default_factory=Description)
    hide: bool = False
    is_static: bool = False

    @property
    def simple_name(self) -> str:
        """Last dot-separated segment of the name, used for overrides."""
        return self.name.rsplit(".", 1)[-1]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this member.
        """
        return {
            "name": self.name,
            "class_name": self.class_name,
            "short_class_name": self.short_class_name,
            "description": self.description.to_dict(),
            "hide": self.hide,
            "is_static": self.is_static,
        }


@dataclass
class DocCfg(DocMember):
    """A configuration option accepted by a class constructor."""

    type: Optional[str] = None
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({"type": self.type, "optional": self.optional})
        return data


@dataclass
class DocProperty(DocMember):
    """A public property of a class."""

    type: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["type"] = self.type
        return data


@dataclass
class DocMethod(DocMember):
    """A method of a class.

    Attributes:
        params: Method parameters in declaration order.
        return_type: Declared return type, if any.
        return_description: Rendered return value description.
    """

    params: list[Param] = field(default_factory=list)
    return_type: Optional[str] = None
    return_description: Optional[Description] = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "params": [p.to_dict() for p in self.params],
                "return_type": self.return_type,
                "return_description": (
                    self.return_description.to_dict()
                    if self.return_description
                    else None
                ),
            }
        )
        return data


@dataclass
class DocEvent(DocMember):
    """An event fired by a class, with the listener arguments."""

    params: list[Param] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["params"] = [p.to_dict() for p in self.params]
        return data


@dataclass
class ClassRef:
    """Reference to another class by name.

    Attributes:
        class_name: Fully qualified class name.
        short_class_name: Class name without its package.
    """

    class_name: str
    short_class_name: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this reference.
        """
        return {
            "class_name": self.class_name,
            "short_class_name": self.short_class_name,
        }


def split_class_name(class_name: str) -> tuple[str, str]:
    """Split a fully qualified class name into package and short name.

    Args:
        class_name: Dotted class name, e.g. 'Ext.data.Store'.

    Returns:
        A (package_name, short_class_name) tuple; the package is an
        empty string when the name has no dot.
    """
    package, _, short = class_name.rpartition(".")
    return package, short


@dataclass
class DocClass:
    """Represents a documented class and its resolved members.

    Cross-references to other classes are stored as indices into the
    owning class list (``parent_index``) or as name references
    (``sub_classes``/``super_classes``), never as object links.

    Attributes:
        class_name: Fully qualified class name.
        short_class_name: Class name without its package.
        package_name: Dotted package, empty for top-level classes.
        defined_in: Base name of the source file declaring the class.
        singleton: Whether the class is a singleton.
        description: Rendered class description.
        parent_class_name: Name given by ``@extends``, if any.
        has_constructor: Whether a ``@constructor`` tag was present.
        constructor_description: Rendered constructor description.
        params: Constructor parameters.
        cfgs: Config options, own and inherited.
        properties: Properties, own and inherited.
        methods: Methods, own and inherited.
        events: Events, own and inherited.
        sub_classes: Direct subclasses.
        super_classes: Ancestors, root first, immediate parent last.
        parent_index: Index of the resolved parent in the class list.
        component: Whether an ancestor is the designated component class.
        excluded: Whether the class was tagged private or ignored.
    """

    class_name: str
    short_class_name: str = ""
    package_name: str = ""
    defined_in: str = ""
    singleton: bool = False
    description: Description = field(default_factory=Description)
    parent_class_name: Optional[str] = None
    has_constructor: bool = False
    constructor_description: Optional[Description] = None
    params: list[Param] = field(default_factory=list)
    cfgs: list[DocCfg] = field(default_factory=list)
    properties: list[DocProperty] = field(default_factory=list)
    methods: list[DocMethod] = field(default_factory=list)
    events: list[DocEvent] = field(default_factory=list)
    sub_classes: list[ClassRef] = field(default_factory=list)
    super_classes: list[ClassRef] = field(default_factory=list)
    parent_index: Optional[int] = None
    component: bool = False
    excluded: bool = False

    def __post_init__(self) -> None:
        if not self.short_class_name:
            self.package_name, self.short_class_name = split_class_name(
                self.class_name
            )

    def ref(self) -> ClassRef:
        """Build a name reference to this class."""
        return ClassRef(self.class_name, self.short_class_name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this class.
        """
        return {
            "class_name": self.class_name,
            "short_class_name": self.short_class_name,
            "package_name": self.package_name,
            "defined_in": self.defined_in,
            "singleton": self.singleton,
            "description": self.description.to_dict(),
            "parent_class_name": self.parent_class_name,
            "has_constructor": self.has_constructor,
            "constructor_description": (
                self.constructor_description.to_dict()
                if self.constructor_description
                else None
            ),
            "params": [p.to_dict() for p in self.params],
            "cfgs": [c.to_dict() for c in self.cfgs],
            "properties": [p.to_dict() for p in self.properties],
            "methods": [m.to_dict() for m in self.methods],
            "events": [e.to_dict() for e in self.events],
            "sub_classes": [s.to_dict() for s in self.sub_classes],
            "super_classes": [s.to_dict() for s in self.super_classes],
            "component": self.component,
        }


@dataclass
class DocSet:
    """Entities collected from all scanned files, before resolution.

    Collections are append-only while files are scanned.
    """

    classes: list[DocClass] = field(default_factory=list)
    cfgs: list[DocCfg] = field(default_factory=list)
    properties: list[DocProperty] = field(default_factory=list)
    methods: list[DocMethod] = field(default_factory=list)
    events: list[DocEvent] = field(default_factory=list)

    def add(self, entity: DocClass | DocMember) -> None:
        """Append an entity to the collection matching its type.

        Args:
            entity: A class or member produced by the classifier.

        Raises:
            TypeError: If the entity type is not a documented kind.
        """
        if isinstance(entity, DocClass):
            self.classes.append(entity)
        elif isinstance(entity, DocCfg):
            self.cfgs.append(entity)
        elif isinstance(entity, DocProperty):
            self.properties.append(entity)
        elif isinstance(entity, DocMethod):
            self.methods.append(entity)
        elif isinstance(entity, DocEvent):
            self.events.append(entity)
        else:
            raise TypeError(f"Unsupported entity: {entity!r}")

    def extend(self, other: DocSet) -> None:
        """Append every entity of another set, preserving order."""
        self.classes.extend(other.classes)
        self.cfgs.extend(other.cfgs)
        self.properties.extend(other.properties)
        self.methods.extend(other.methods)
        self.events.extend(other.events)
