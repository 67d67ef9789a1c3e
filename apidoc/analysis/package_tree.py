"""Package tree built from dotted class names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from apidoc.parsers.structure import ClassRef, DocClass


@dataclass
class PackageNode:
    """A package in the namespace tree.

    Attributes:
        name: Last segment of the package name; empty for the root.
        full_name: Dotted package name; empty for the root.
        packages: Child packages sorted by name.
        classes: Classes declared directly in this package, sorted.
    """

    name: str = ""
    full_name: str = ""
    packages: list[PackageNode] = field(default_factory=list)
    classes: list[ClassRef] = field(default_factory=list)

    def child(self, name: str) -> PackageNode:
        """Return the child package with this name, creating it if needed."""
        for package in self.packages:
            if package.name == name:
                return package
        full_name = f"{self.full_name}.{name}" if self.full_name else name
        package = PackageNode(name=name, full_name=full_name)
        self.packages.append(package)
        return package

    def find(self, full_name: str) -> PackageNode | None:
        """Find a descendant package by its dotted name."""
        node: PackageNode | None = self
        for part in full_name.split(".") if full_name else []:
            node = next((p for p in node.packages if p.name == part), None)
            if node is None:
                return None
        return node

    def sort(self) -> None:
        """Sort packages and classes recursively by name."""
        self.packages.sort(key=lambda p: p.name)
        self.classes.sort(key=lambda c: c.class_name)
        for package in self.packages:
            package.sort()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this subtree.
        """
        return {
            "name": self.name,
            "full_name": self.full_name,
            "packages": [p.to_dict() for p in self.packages],
            "classes": [c.to_dict() for c in self.classes],
        }


def build_package_tree(classes: list[DocClass]) -> PackageNode:
    """Build the namespace tree of a set of classes.

    Args:
        classes: Resolved classes.

    Returns:
        The root node, with every level sorted by name.
    """
    root = PackageNode()
    for cls in classes:
        node = root
        if cls.package_name:
            for part in cls.package_name.split("."):
                node = node.child(part)
        node.classes.append(cls.ref())
    root.sort()
    return root
