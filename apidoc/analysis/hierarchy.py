"""Class hierarchy resolution.

Links classes to their parents, groups members under their owning
class, injects inherited members with override, static and hide rules,
and sorts everything for deterministic output.

Classes live in a flat list; parent links are indices into that list
and subclass/superclass lists hold name references only.
"""

import logging
from collections.abc import Callable
from typing import Optional, TypeVar

from apidoc.parsers.structure import DocClass, DocMember, DocSet

logger = logging.getLogger(__name__)

DEFAULT_COMPONENT_CLASS = "Ext.Component"

M = TypeVar("M", bound=DocMember)


class CyclicInheritanceError(ValueError):
    """Raised when a chain of ``@extends`` references loops."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        super().__init__(f"Cyclic inheritance: {' -> '.join(chain)}")


def _member_key(member: DocMember) -> tuple[str, str]:
    return member.name, member.class_name


def _is_overridden(member: DocMember, members: list[M]) -> bool:
    """Check whether a member with the same simple name is already listed."""
    if not member.name:
        return False
    name = member.simple_name
    return any(other.name and other.simple_name == name for other in members)


class HierarchyBuilder:
    """Resolves inheritance across all collected classes.

    Args:
        component_class: Ancestor name that marks a class as a component.
        inherit_from_excluded: Let private or ignored classes act as
            ancestors. They are never part of the returned classes.
    """

    def __init__(
        self,
        component_class: str = DEFAULT_COMPONENT_CLASS,
        inherit_from_excluded: bool = False,
    ) -> None:
        self.component_class = component_class
        self.inherit_from_excluded = inherit_from_excluded

    def build(self, docs: DocSet) -> list[DocClass]:
        """Resolve the hierarchy of a collected entity set.

        The classes in ``docs`` are mutated in place.

        Args:
            docs: Entities collected from every scanned file.

        Returns:
            Resolved, non-excluded classes sorted by class name.

        Raises:
            CyclicInheritanceError: If a parent chain loops.
        """
        arena = self._select_classes(docs.classes)
        index = {cls.class_name: i for i, cls in enumerate(arena)}

        self._link(arena, index)
        self._group(arena, index, docs)

        # Inherit from each ancestor's own declarations only.
        own = [
            (list(c.cfgs), list(c.properties), list(c.methods), list(c.events))
            for c in arena
        ]
        for i, cls in enumerate(arena):
            self._inject(i, arena, own)
            self._drop_hidden(cls)
            self._sort(cls)

        resolved = self._detach_excluded(arena)
        logger.info(
            "Resolved hierarchy of %d classes (%d excluded)",
            len(resolved),
            len(arena) - len(resolved),
        )
        return resolved

    @staticmethod
    def _detach_excluded(arena: list[DocClass]) -> list[DocClass]:
        """Drop excluded classes and re-point parent indices at the result."""
        positions: dict[int, int] = {}
        resolved: list[DocClass] = []
        for i, cls in enumerate(arena):
            if not cls.excluded:
                positions[i] = len(resolved)
                resolved.append(cls)
        for cls in resolved:
            if cls.parent_index is not None:
                cls.parent_index = positions.get(cls.parent_index)
        return resolved

    def _select_classes(self, classes: list[DocClass]) -> list[DocClass]:
        """Pick the classes taking part in resolution, one per name.

        The first public definition of a name wins in every mode; an
        excluded definition is only kept when no public one exists.
        """
        selected: dict[str, DocClass] = {}
        for cls in classes:
            if cls.excluded and not self.inherit_from_excluded:
                logger.debug("Excluding class %s", cls.class_name)
                continue
            current = selected.get(cls.class_name)
            if current is not None and current.excluded and not cls.excluded:
                logger.debug(
                    "Public class %s in %s replaces excluded definition",
                    cls.class_name,
                    cls.defined_in,
                )
                selected[cls.class_name] = cls
                continue
            if current is not None:
                logger.warning(
                    "Duplicate class %s in %s, keeping definition from %s",
                    cls.class_name,
                    cls.defined_in,
                    selected[cls.class_name].defined_in,
                )
                continue
            selected[cls.class_name] = cls
        return sorted(selected.values(), key=lambda c: c.class_name)

    def _link(self, arena: list[DocClass], index: dict[str, int]) -> None:
        for cls in arena:
            cls.parent_index = None
            cls.sub_classes = []
            cls.super_classes = []
            cls.component = False
        for cls in arena:
            if cls.parent_class_name is None:
                continue
            parent_index = index.get(cls.parent_class_name)
            if parent_index is None:
                logger.debug(
                    "Parent %s of %s is not documented",
                    cls.parent_class_name,
                    cls.class_name,
                )
                continue
            cls.parent_index = parent_index
            if not cls.excluded:
                arena[parent_index].sub_classes.append(cls.ref())

    def _group(
        self, arena: list[DocClass], index: dict[str, int], docs: DocSet
    ) -> None:
        for cls in arena:
            cls.cfgs, cls.properties, cls.methods, cls.events = [], [], [], []

        def attach(members: list[M], target: Callable[[DocClass], list[M]]) -> None:
            for member in members:
                owner = index.get(member.class_name)
                if owner is None:
                    logger.debug(
                        "No class %s for member %s", member.class_name, member.name
                    )
                    continue
                target(arena[owner]).append(member)

        attach(docs.cfgs, lambda c: c.cfgs)
        attach(docs.properties, lambda c: c.properties)
        attach(docs.methods, lambda c: c.methods)
        attach(docs.events, lambda c: c.events)

    def ancestors(self, i: int, arena: list[DocClass]) -> list[int]:
        """Return ancestor indices of a class, closest first.

        Raises:
            CyclicInheritanceError: If the parent chain loops.
        """
        chain: list[int] = []
        visited = {i}
        parent = arena[i].parent_index
        while parent is not None:
            if parent in visited:
                names = [arena[j].class_name for j in [i, *chain, parent]]
                raise CyclicInheritanceError(names)
            visited.add(parent)
            chain.append(parent)
            parent = arena[parent].parent_index
        return chain

    def _inject(
        self,
        i: int,
        arena: list[DocClass],
        own: list[tuple[list, list, list, list]],
    ) -> None:
        cls = arena[i]
        supers = []
        for j in self.ancestors(i, arena):
            ancestor = arena[j]
            supers.append(ancestor.ref())
            if ancestor.class_name == self.component_class:
                cls.component = True
            cfgs, properties, methods, events = own[j]
            self._inherit(cls.cfgs, cfgs)
            self._inherit(cls.properties, properties)
            self._inherit(cls.methods, methods)
            self._inherit(cls.events, events)
        supers.reverse()
        cls.super_classes = supers

    @staticmethod
    def _inherit(members: list[M], inherited: list[M]) -> None:
        for member in inherited:
            if member.is_static or _is_overridden(member, members):
                continue
            members.append(member)

    @staticmethod
    def _drop_hidden(cls: DocClass) -> None:
        cls.cfgs = [m for m in cls.cfgs if not m.hide]
        cls.properties = [m for m in cls.properties if not m.hide]
        cls.methods = [m for m in cls.methods if not m.hide]
        cls.events = [m for m in cls.events if not m.hide]

    @staticmethod
    def _sort(cls: DocClass) -> None:
        cls.cfgs.sort(key=_member_key)
        cls.properties.sort(key=_member_key)
        cls.methods.sort(key=_member_key)
        cls.events.sort(key=_member_key)
        cls.sub_classes.sort(key=lambda ref: ref.class_name)


def parent_of(cls: DocClass, classes: list[DocClass]) -> Optional[DocClass]:
    """Look up the resolved parent of a class in its arena."""
    if cls.parent_index is None:
        return None
    return classes[cls.parent_index]
