"""CLI commands for the API documentation builder.

Provides the Click-based command group 'apidoc' with subcommands for
building the documentation site, dumping the resolved model as JSON
and printing the package tree.
"""

import logging
from pathlib import Path
from typing import Optional

import click
import yaml

from apidoc import __version__
from apidoc.analysis.hierarchy import CyclicInheritanceError
from apidoc.analysis.package_tree import PackageNode
from apidoc.generators.doc_builder import DocBuilder, DocModel, collect_files
from apidoc.generators.template_manager import DEFAULT_TEMPLATE_DIR, TemplateManager
from apidoc.output.site import SiteWriter, model_to_json, write_model_json
from apidoc.utils.config import AppConfig, load_config
from apidoc.utils.logging import setup_logging
from apidoc.utils.manifest import (
    ManifestError,
    load_manifest,
    load_template_metadata,
)

logger = logging.getLogger(__name__)


def _source_files(
    config: AppConfig, paths: tuple[str, ...], manifest: Optional[str]
) -> list[Path]:
    """Resolve the source files from a manifest and/or paths.

    Args:
        config: Application configuration.
        paths: Files or directories given on the command line.
        manifest: Optional manifest file listing sources.

    Returns:
        Source files in processing order.

    Raises:
        click.ClickException: If the manifest is malformed or no
            sources were given.
    """
    files: list[Path] = []
    if manifest:
        try:
            files.extend(load_manifest(manifest))
        except ManifestError as e:
            raise click.ClickException(str(e)) from e
    files.extend(collect_files(paths, config))
    if not files:
        raise click.ClickException("No source files given (use PATHS or --manifest)")
    return files


def _build_model(config: AppConfig, files: list[Path]) -> DocModel:
    """Run the pipeline over the files and resolve the model."""
    builder = DocBuilder(config)
    builder.add_files(files)
    try:
        return builder.build()
    except CyclicInheritanceError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="apidoc")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a YAML configuration file.",
)
@click.pass_context
def apidoc(ctx: click.Context, config_path: Optional[str]) -> None:
    """API Documentation Builder: class reference docs from source comments."""
    try:
        config = load_config(config_path)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )
    ctx.obj = config


@apidoc.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option(
    "--manifest",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML manifest listing the source files.",
)
@click.option("--output-dir", type=click.Path(), default=None, help="Output directory.")
@click.option(
    "--template-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Template set directory containing template.yaml.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="List the files that would be processed without writing anything.",
)
@click.pass_obj
def build(
    config: AppConfig,
    paths: tuple[str, ...],
    manifest: Optional[str],
    output_dir: Optional[str],
    template_dir: Optional[str],
    dry_run: bool,
) -> None:
    """Build the documentation site.

    Scans every source file, resolves the class hierarchy and renders
    one page per class plus the package tree.
    """
    files = _source_files(config, paths, manifest)
    click.echo(f"Found {len(files)} source files")

    if dry_run:
        for f in files:
            click.echo(f"  Would process: {f}")
        click.echo("Dry run complete. Nothing written.")
        return

    try:
        metadata = load_template_metadata(
            template_dir or config.output.template_dir or str(DEFAULT_TEMPLATE_DIR)
        )
    except ManifestError as e:
        raise click.ClickException(str(e)) from e

    model = _build_model(config, files)

    out_dir = output_dir or config.output.output_dir
    templates = TemplateManager(metadata, page_extension=config.links.page_extension)
    try:
        SiteWriter(out_dir, templates).write(model)
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Documentation for {len(model.classes)} classes written to {out_dir}")


@apidoc.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option(
    "--manifest",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML manifest listing the source files.",
)
@click.option(
    "--output", "-o", type=click.Path(), default=None, help="Output JSON file."
)
@click.pass_obj
def inspect(
    config: AppConfig,
    paths: tuple[str, ...],
    manifest: Optional[str],
    output: Optional[str],
) -> None:
    """Dump the resolved documentation model as JSON."""
    model = _build_model(config, _source_files(config, paths, manifest))
    if output:
        write_model_json(model, output)
        click.echo(f"Model written to {output}")
    else:
        click.echo(model_to_json(model))


def _echo_tree(node: PackageNode, depth: int = 0) -> None:
    indent = "  " * depth
    for package in node.packages:
        click.echo(f"{indent}{package.name}/")
        _echo_tree(package, depth + 1)
    for ref in node.classes:
        click.echo(f"{indent}{ref.short_class_name}")


@apidoc.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option(
    "--manifest",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML manifest listing the source files.",
)
@click.pass_obj
def tree(config: AppConfig, paths: tuple[str, ...], manifest: Optional[str]) -> None:
    """Print the package tree of the documented classes."""
    model = _build_model(config, _source_files(config, paths, manifest))
    _echo_tree(model.tree)
    click.echo(f"\nTotal: {len(model.classes)} classes")
