"""Entity classifier for parsed documentation comments.

Decides which kind of entity a comment documents and builds the
matching model object. The owning class of members is taken from an
explicit per-file scan context that each ``@class`` comment replaces.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from apidoc.analysis.links import LinkResolver
from apidoc.parsers.scanner import ScannedComment
from apidoc.parsers.structure import (
    DocCfg,
    DocClass,
    DocEvent,
    DocMember,
    DocMethod,
    DocProperty,
    Param,
    split_class_name,
)
from apidoc.parsers.tags import (
    CfgTag,
    ClassTag,
    EventTag,
    ExtendsTag,
    MemberTag,
    MethodTag,
    ParamTag,
    PropertyTag,
    RawComment,
    ReturnTag,
    TypeTag,
    parse_comment,
)

logger = logging.getLogger(__name__)

Entity = Union[DocClass, DocMember]

EXCLUDE_FLAGS = ("private", "ignore")


class EntityKind(str, Enum):
    """Kinds of documented entities."""

    CLASS = "class"
    EVENT = "event"
    CFG = "cfg"
    METHOD = "method"
    PROPERTY = "property"


@dataclass(frozen=True)
class ScanContext:
    """Ambient owner for members parsed from one file.

    Attributes:
        file_name: Base name of the file being scanned.
        class_name: Fully qualified name of the current class.
        short_class_name: Current class name without its package.
    """

    file_name: str = ""
    class_name: str = ""
    short_class_name: str = ""


@dataclass
class Classification:
    """Result of classifying one comment.

    Attributes:
        kind: Entity kind the comment describes.
        entities: Entities to collect; members tagged private or
            ignored are omitted, excluded classes are flagged instead.
        context: Scan context to use for the next comment.
    """

    kind: EntityKind
    entities: list[Entity] = field(default_factory=list)
    context: ScanContext = field(default_factory=ScanContext)


class EntityClassifier:
    """Builds classes and members from documentation comments.

    Args:
        links: Resolver used to render descriptions.
        function_keyword: Keyword introducing a function definition in
            the documented language.
    """

    def __init__(
        self,
        links: Optional[LinkResolver] = None,
        function_keyword: str = "function",
    ) -> None:
        self.links = links or LinkResolver()
        self.function_keyword = function_keyword

    def kind_of(self, comment: RawComment, scanned: ScannedComment) -> EntityKind:
        """Determine the entity kind; the first matching rule wins.

        Args:
            comment: Parsed comment.
            scanned: Scanned comment with its trailing code tokens.

        Returns:
            The entity kind.
        """
        if comment.first(ClassTag):
            return EntityKind.CLASS
        if comment.first(EventTag):
            return EntityKind.EVENT
        if comment.first(CfgTag):
            return EntityKind.CFG
        if (
            comment.first(ParamTag)
            or comment.first(ReturnTag)
            or comment.first(MethodTag)
        ):
            return EntityKind.METHOD
        if comment.first(TypeTag) or comment.first(PropertyTag):
            return EntityKind.PROPERTY
        if self.function_keyword in (scanned.first_token, scanned.second_token):
            return EntityKind.METHOD
        return EntityKind.PROPERTY

    def classify(
        self, scanned: ScannedComment, context: ScanContext
    ) -> Classification:
        """Classify a scanned comment and build its entities.

        Args:
            scanned: Comment body and trailing tokens.
            context: Current scan context of the file.

        Returns:
            The classification, including the context for the next
            comment of the same file.
        """
        comment = parse_comment(scanned.body)
        kind = self.kind_of(comment, scanned)

        if kind is EntityKind.CLASS:
            cls = self._build_class(comment, context)
            context = replace(
                context,
                class_name=cls.class_name,
                short_class_name=cls.short_class_name,
            )
            entities: list[Entity] = [cls]
            entities.extend(
                self._build_cfg(tag, comment, context, nested=True)
                for tag in comment.all(CfgTag)
            )
            logger.debug("Class %s in %s", cls.class_name, context.file_name)
            return Classification(kind, entities, context)

        if kind is EntityKind.EVENT:
            members: list[DocMember] = [self._build_event(comment, context)]
        elif kind is EntityKind.CFG:
            members = [
                self._build_cfg(tag, comment, context)
                for tag in comment.all(CfgTag)
            ]
        elif kind is EntityKind.METHOD:
            members = [self._build_method(comment, scanned, context)]
        else:
            members = [self._build_property(comment, scanned, context)]

        if any(comment.has_flag(flag) for flag in EXCLUDE_FLAGS):
            logger.debug(
                "Skipping excluded %s %s",
                kind.value,
                ", ".join(m.name for m in members),
            )
            return Classification(kind, [], context)
        return Classification(kind, list(members), context)

    def _token_name(self, scanned: ScannedComment) -> str:
        if scanned.first_token == self.function_keyword:
            return scanned.second_token
        return scanned.first_token

    def _read_params(self, comment: RawComment, class_name: str) -> list[Param]:
        return [
            Param(
                name=tag.name,
                type=tag.type,
                description=self.links.resolve(tag.description, class_name),
                optional=tag.optional,
            )
            for tag in comment.all(ParamTag)
        ]

    def _owner(self, comment: RawComment, context: ScanContext) -> tuple[str, str]:
        member = comment.first(MemberTag)
        if member and member.class_name:
            return member.class_name, split_class_name(member.class_name)[1]
        return context.class_name, context.short_class_name

    def _apply_common(
        self, entity: DocMember, comment: RawComment, context: ScanContext
    ) -> DocMember:
        entity.class_name, entity.short_class_name = self._owner(comment, context)
        entity.hide = comment.has_flag("hide")
        entity.is_static = comment.has_flag("static")
        return entity

    def _build_class(self, comment: RawComment, context: ScanContext) -> DocClass:
        class_tag = comment.first(ClassTag)
        extends_tag = comment.first(ExtendsTag)
        constructor_tag = comment.flag("constructor")

        class_name = class_tag.class_name
        description = class_tag.description
        if description is None and extends_tag is not None:
            description = extends_tag.description
        if description is None:
            description = comment.description

        cls = DocClass(
            class_name=class_name,
            defined_in=context.file_name,
            singleton=comment.has_flag("singleton"),
            description=self.links.resolve(description, class_name),
            parent_class_name=(
                extends_tag.class_name
                if extends_tag and extends_tag.class_name
                else None
            ),
            has_constructor=constructor_tag is not None,
            excluded=any(comment.has_flag(flag) for flag in EXCLUDE_FLAGS),
        )
        if constructor_tag is not None:
            cls.constructor_description = self.links.resolve(
                constructor_tag.text, class_name
            )
            cls.params = self._read_params(comment, class_name)
        return cls

    def _build_cfg(
        self,
        tag: CfgTag,
        comment: RawComment,
        context: ScanContext,
        nested: bool = False,
    ) -> DocCfg:
        cfg = DocCfg(name=tag.name, type=tag.type, optional=tag.optional)
        if nested:
            cfg.class_name = context.class_name
            cfg.short_class_name = context.short_class_name
        else:
            self._apply_common(cfg, comment, context)
        cfg.description = self.links.resolve(
            tag.description or comment.description, cfg.class_name
        )
        return cfg

    def _build_event(self, comment: RawComment, context: ScanContext) -> DocEvent:
        tag = comment.first(EventTag)
        event = DocEvent(name=tag.name)
        self._apply_common(event, comment, context)
        event.description = self.links.resolve(
            tag.description or comment.description,
            event.class_name,
            always_short=True,
        )
        event.params = self._read_params(comment, event.class_name)
        return event

    def _build_method(
        self, comment: RawComment, scanned: ScannedComment, context: ScanContext
    ) -> DocMethod:
        method_tag = comment.first(MethodTag)
        member_tag = comment.first(MemberTag)

        name = self._token_name(scanned)
        if member_tag and member_tag.member_name:
            name = member_tag.member_name
        if method_tag and method_tag.name:
            name = method_tag.name

        method = DocMethod(name=name)
        self._apply_common(method, comment, context)
        method.description = self.links.resolve(
            comment.description, method.class_name, always_short=True
        )
        return_tag = comment.first(ReturnTag)
        if return_tag is not None:
            method.return_type = return_tag.type
            method.return_description = self.links.resolve(
                return_tag.description, method.class_name
            )
        method.params = self._read_params(comment, method.class_name)
        return method

    def _build_property(
        self, comment: RawComment, scanned: ScannedComment, context: ScanContext
    ) -> DocProperty:
        property_tag = comment.first(PropertyTag)
        member_tag = comment.first(MemberTag)
        type_tag = comment.first(TypeTag)

        name = self._token_name(scanned)
        if member_tag and member_tag.member_name:
            name = member_tag.member_name
        if property_tag and property_tag.name:
            name = property_tag.name

        prop = DocProperty(name=name, type=type_tag.type if type_tag else None)
        self._apply_common(prop, comment, context)
        description = comment.description
        if not description and property_tag is not None:
            description = property_tag.description
        prop.description = self.links.resolve(description, prop.class_name)
        return prop
