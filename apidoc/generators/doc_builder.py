"""Documentation model builder.

Scans source files one at a time, classifies every documentation
comment and collects the entities, then resolves the class hierarchy
and package tree once all files are in.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from apidoc.analysis.hierarchy import HierarchyBuilder, parent_of
from apidoc.analysis.links import LinkResolver
from apidoc.analysis.package_tree import PackageNode, build_package_tree
from apidoc.parsers.classifier import EntityClassifier, ScanContext
from apidoc.parsers.scanner import ScannedComment, scan_chunks, scan_file
from apidoc.parsers.structure import DocClass, DocSet
from apidoc.utils.config import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class DocModel:
    """The resolved documentation model handed to the renderer.

    Attributes:
        classes: Resolved classes sorted by class name.
        tree: Package tree of the classes.
    """

    classes: list[DocClass] = field(default_factory=list)
    tree: PackageNode = field(default_factory=PackageNode)

    def get(self, class_name: str) -> Optional[DocClass]:
        """Find a class by its fully qualified name."""
        for cls in self.classes:
            if cls.class_name == class_name:
                return cls
        return None

    def parent(self, cls: DocClass) -> Optional[DocClass]:
        """Return the resolved parent of a class, if documented."""
        return parent_of(cls, self.classes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of the model.
        """
        return {
            "classes": [c.to_dict() for c in self.classes],
            "tree": self.tree.to_dict(),
        }


class DocBuilder:
    """Runs the scan, classify and resolve pipeline.

    Each file is scanned with its own scan context, so the current class
    never leaks from one file into the next.
    """

    def __init__(self, config: Optional[AppConfig] = None) -> None:
        """Initialize the builder.

        Args:
            config: Application configuration. Uses defaults if not
                provided.
        """
        self.config = config or AppConfig()
        links = LinkResolver(
            page_extension=self.config.links.page_extension,
            max_short_length=self.config.links.short_description_length,
            ellipsis=self.config.links.ellipsis,
        )
        self.classifier = EntityClassifier(
            links, function_keyword=self.config.scanner.function_keyword
        )
        self.hierarchy = HierarchyBuilder(
            component_class=self.config.hierarchy.component_class,
            inherit_from_excluded=self.config.hierarchy.inherit_from_excluded,
        )
        self.docs = DocSet()

    def add_comments(
        self, comments: Iterable[ScannedComment], file_name: str = "<string>"
    ) -> DocSet:
        """Classify a file's comments and collect the entities.

        Args:
            comments: Scanned comments of one file, in order.
            file_name: Name recorded as the defining file of classes.

        Returns:
            The entities contributed by this file.
        """
        found = DocSet()
        context = ScanContext(file_name=file_name)
        for scanned in comments:
            result = self.classifier.classify(scanned, context)
            context = result.context
            for entity in result.entities:
                found.add(entity)
        self.docs.extend(found)
        return found

    def add_source(self, source: str, file_name: str = "<string>") -> DocSet:
        """Scan and collect a source string."""
        return self.add_comments(scan_chunks([source]), file_name)

    def add_file(self, file_path: str) -> DocSet:
        """Scan and collect one source file.

        A file that cannot be read contributes whatever was scanned
        before the failure; the error is logged by the scanner.

        Args:
            file_path: Path to the source file.

        Returns:
            The entities contributed by this file.
        """
        path = Path(file_path)
        logger.info("Processing: %s", path.name)
        comments = scan_file(str(path), encoding=self.config.scanner.encoding)
        return self.add_comments(comments, path.name)

    def add_files(self, file_paths: Iterable[Path]) -> None:
        """Scan and collect source files in order."""
        for file_path in file_paths:
            self.add_file(str(file_path))

    def build(self) -> DocModel:
        """Resolve everything collected so far into a model.

        Returns:
            The resolved documentation model.

        Raises:
            CyclicInheritanceError: If a parent chain loops.
        """
        classes = self.hierarchy.build(self.docs)
        model = DocModel(classes=classes, tree=build_package_tree(classes))
        logger.info(
            "Built model: %d classes, %d configs, %d properties, %d methods, "
            "%d events collected",
            len(classes),
            len(self.docs.cfgs),
            len(self.docs.properties),
            len(self.docs.methods),
            len(self.docs.events),
        )
        return model


def collect_files(paths: Iterable[str], config: Optional[AppConfig] = None) -> list[Path]:
    """Collect source files from files and directories.

    Directories are searched recursively for the configured extensions,
    skipping any path containing an excluded directory name.

    Args:
        paths: File or directory paths.
        config: Application configuration.

    Returns:
        Source file paths, files in given order then sorted directory hits.
    """
    config = config or AppConfig()
    exclude = set(config.scanner.exclude_patterns)
    files: list[Path] = []
    for path in paths:
        root = Path(path)
        if root.is_file():
            files.append(root)
            continue
        for ext in config.scanner.extensions:
            for f in sorted(root.rglob(f"*{ext}")):
                if not any(part in exclude for part in f.parts):
                    files.append(f)
    return files
