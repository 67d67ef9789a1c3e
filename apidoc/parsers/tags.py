"""Tag parser for documentation comment bodies.

Splits a raw comment body into its leading free-text description and
an ordered list of typed tags. Inline ``{@link ...}`` references are
left untouched for the link resolver.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, TypeVar, Union

_DECORATION_RE = re.compile(r"^\s*\*+ ?")
_TAG_LINE_RE = re.compile(r"^\s*@(?P<name>[A-Za-z]\w*)(?P<rest>.*)$")
_TYPED_NAME_RE = re.compile(
    r"^\s*(?:\{(?P<type>[^}]*)\})?\s*(?P<name>\S+)?\s*(?P<desc>.*)$", re.DOTALL
)
_TYPE_PREFIX_RE = re.compile(r"^\s*\{(?P<type>[^}]*)\}(?P<desc>.*)$", re.DOTALL)
_OPTIONAL_PREFIX_RE = re.compile(r"^\(optional\)\s*", re.IGNORECASE)

MEMBER_SEPARATOR = "#"


@dataclass(frozen=True)
class ClassTag:
    """``@class Name description``."""

    class_name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class ExtendsTag:
    """``@extends Name description``."""

    class_name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class CfgTag:
    """``@cfg {Type} name description``."""

    name: str
    type: Optional[str] = None
    description: Optional[str] = None
    optional: bool = False


@dataclass(frozen=True)
class ParamTag:
    """``@param {Type} name description``."""

    name: str
    type: Optional[str] = None
    description: Optional[str] = None
    optional: bool = False


@dataclass(frozen=True)
class PropertyTag:
    """``@property name description``; the name may be omitted."""

    name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class MethodTag:
    """``@method name``; the name may be omitted."""

    name: Optional[str] = None


@dataclass(frozen=True)
class EventTag:
    """``@event name description``."""

    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class ReturnTag:
    """``@return {Type} description``."""

    type: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class TypeTag:
    """``@type Type``."""

    type: Optional[str] = None


@dataclass(frozen=True)
class MemberTag:
    """``@member Class#member``; the member part may be omitted."""

    class_name: str
    member_name: Optional[str] = None


@dataclass(frozen=True)
class SimpleTag:
    """A flag-like tag such as ``@static`` or ``@constructor``.

    Attributes:
        name: Tag name without the ``@``.
        text: Any text following the tag name.
    """

    name: str
    text: str = ""


@dataclass(frozen=True)
class UnknownTag:
    """A tag that is not part of the recognised set."""

    name: str
    text: str = ""


Tag = Union[
    ClassTag,
    ExtendsTag,
    CfgTag,
    ParamTag,
    PropertyTag,
    MethodTag,
    EventTag,
    ReturnTag,
    TypeTag,
    MemberTag,
    SimpleTag,
    UnknownTag,
]

SIMPLE_TAGS = frozenset(
    {"static", "private", "ignore", "hide", "singleton", "constructor"}
)

T = TypeVar("T")


@dataclass(frozen=True)
class RawComment:
    """A parsed comment: free-text description plus tags in order.

    Attributes:
        description: Text preceding the first tag.
        tags: Tags in the order they appear.
    """

    description: str = ""
    tags: tuple[Tag, ...] = field(default_factory=tuple)

    def first(self, kind: type[T]) -> Optional[T]:
        """Return the first tag of the given variant, or None."""
        for tag in self.tags:
            if isinstance(tag, kind):
                return tag
        return None

    def all(self, kind: type[T]) -> list[T]:
        """Return every tag of the given variant in order."""
        return [tag for tag in self.tags if isinstance(tag, kind)]

    def flag(self, name: str) -> Optional[SimpleTag]:
        """Return the first simple tag with this name, or None."""
        for tag in self.tags:
            if isinstance(tag, SimpleTag) and tag.name == name:
                return tag
        return None

    def has_flag(self, name: str) -> bool:
        """Check whether a simple tag with this name is present."""
        return self.flag(name) is not None

    @property
    def tag_names(self) -> list[str]:
        """Names of all tags in order, as written after the ``@``."""
        return [tag_name(tag) for tag in self.tags]


_VARIANT_NAMES: dict[type, str] = {
    ClassTag: "class",
    ExtendsTag: "extends",
    CfgTag: "cfg",
    ParamTag: "param",
    PropertyTag: "property",
    MethodTag: "method",
    EventTag: "event",
    ReturnTag: "return",
    TypeTag: "type",
    MemberTag: "member",
}


def tag_name(tag: Tag) -> str:
    """Return the ``@``-less name of a tag."""
    if isinstance(tag, (SimpleTag, UnknownTag)):
        return tag.name
    return _VARIANT_NAMES[type(tag)]


def _clean_line(line: str) -> str:
    """Strip leading whitespace and comment-decoration asterisks."""
    match = _DECORATION_RE.match(line)
    if match:
        return line[match.end() :]
    return line.lstrip()


def _none_if_empty(text: str) -> Optional[str]:
    text = text.strip()
    return text or None


def _split_word(text: str) -> tuple[str, str]:
    """Split off the first whitespace-delimited word."""
    parts = text.strip().split(None, 1)
    if not parts:
        return "", ""
    return parts[0], parts[1] if len(parts) > 1 else ""


def _parse_typed(text: str) -> tuple[Optional[str], str, Optional[str], bool]:
    """Parse ``{Type} name description`` with optional markers.

    A name written as ``[name]`` or ``name?``, or a description starting
    with ``(optional)``, marks the item optional.

    Returns:
        A (type, name, description, optional) tuple.
    """
    match = _TYPED_NAME_RE.match(text)
    type_ = _none_if_empty(match.group("type") or "")
    name = match.group("name") or ""
    desc = match.group("desc") or ""
    optional = False

    if name.startswith("[") and name.endswith("]"):
        name = name[1:-1]
        optional = True
    if name.endswith("?"):
        name = name[:-1]
        optional = True
    stripped = _OPTIONAL_PREFIX_RE.sub("", desc.strip(), count=1)
    if stripped != desc.strip():
        optional = True
    return type_, name, _none_if_empty(stripped), optional


def parse_tag(name: str, text: str) -> Tag:
    """Build the tag variant for a tag name and its text.

    Args:
        name: Tag name without the ``@``.
        text: Everything after the tag name up to the next tag.

    Returns:
        The parsed tag.
    """
    if name == "class":
        class_name, rest = _split_word(text)
        return ClassTag(class_name, _none_if_empty(rest))
    if name == "extends":
        class_name, rest = _split_word(text)
        return ExtendsTag(class_name, _none_if_empty(rest))
    if name == "cfg":
        type_, cfg_name, desc, optional = _parse_typed(text)
        return CfgTag(cfg_name, type_, desc, optional)
    if name == "param":
        type_, param_name, desc, optional = _parse_typed(text)
        return ParamTag(param_name, type_, desc, optional)
    if name == "property":
        prop_name, rest = _split_word(text)
        return PropertyTag(prop_name or None, _none_if_empty(rest))
    if name == "method":
        method_name, _ = _split_word(text)
        return MethodTag(method_name or None)
    if name == "event":
        event_name, rest = _split_word(text)
        return EventTag(event_name, _none_if_empty(rest))
    if name in ("return", "returns"):
        match = _TYPE_PREFIX_RE.match(text)
        if match is None:
            return ReturnTag(None, _none_if_empty(text))
        return ReturnTag(
            _none_if_empty(match.group("type")), _none_if_empty(match.group("desc"))
        )
    if name == "type":
        type_text = text.strip()
        if type_text.startswith("{") and type_text.endswith("}"):
            type_text = type_text[1:-1]
        return TypeTag(_none_if_empty(type_text))
    if name == "member":
        target, _ = _split_word(text)
        class_name, sep, member = target.partition(MEMBER_SEPARATOR)
        return MemberTag(class_name, member if sep and member else None)
    if name in SIMPLE_TAGS:
        return SimpleTag(name, text.strip())
    return UnknownTag(name, text.strip())


def parse_comment(body: str) -> RawComment:
    """Parse a raw comment body into description and tags.

    A tag starts with ``@name`` at the beginning of a line (after the
    decoration is stripped) and runs until the next tag line or the end
    of the body.

    Args:
        body: Comment text between ``/**`` and ``*/``.

    Returns:
        The parsed comment.
    """
    description_lines: list[str] = []
    tags: list[Tag] = []
    current: Optional[tuple[str, list[str]]] = None

    for raw_line in body.splitlines():
        line = _clean_line(raw_line)
        match = _TAG_LINE_RE.match(line)
        if match:
            if current is not None:
                tags.append(parse_tag(current[0], "\n".join(current[1])))
            current = (match.group("name"), [match.group("rest")])
        elif current is not None:
            current[1].append(line)
        else:
            description_lines.append(line)

    if current is not None:
        tags.append(parse_tag(current[0], "\n".join(current[1])))

    return RawComment("\n".join(description_lines).strip(), tuple(tags))
