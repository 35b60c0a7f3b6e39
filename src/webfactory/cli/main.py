"""Main CLI entry point for webfactory."""

from pathlib import Path
from typing import Optional

import click

from webfactory import __version__
from webfactory.builder import SiteBuilder
from webfactory.config import config
from webfactory.exceptions import WebfactoryError
from webfactory.logging_config import get_logger, setup_logging
from webfactory.parser import BlueprintParser, format_tree
from webfactory.storage import FileStore


def create_store(source: Path, target: Path) -> FileStore:
    """Create a file store using the configured source layout."""
    return FileStore(
        source.resolve(),
        target.resolve(),
        blueprints_dir=config.blueprints_dir,
        components_dir=config.components_dir,
        blueprint_extension=config.blueprint_extension,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--log-dir", "-l", type=click.Path(file_okay=False, path_type=Path),
              default=config.log_dir, help="Also write a log file to this directory")
@click.pass_context
def main(ctx: click.Context, verbose: bool, log_dir: Optional[Path]) -> None:
    """webfactory - assemble static pages from blueprints and components."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose or config.verbose

    # Set up logging
    setup_logging(ctx.obj["verbose"], log_dir)


@main.command()
@click.option("--source", "-s", type=click.Path(exists=True, file_okay=False, path_type=Path),
              default=config.source_path, help="Directory with blueprints/ and components/")
@click.option("--target", "-t", type=click.Path(file_okay=False, path_type=Path),
              default=config.target_path, help="Output directory")
@click.option("--asset-prefix", default=config.asset_prefix,
              help="URL prefix for generated css/ and js/ links")
def build(source: Path, target: Path, asset_prefix: str) -> None:
    """Build every blueprint into HTML pages."""
    logger = get_logger('cli')
    logger.info(f"Source directory: {source}")
    logger.info(f"Target directory: {target}")

    try:
        builder = SiteBuilder(create_store(source, target), asset_prefix=asset_prefix)
        reports = builder.build()
    except WebfactoryError as e:
        logger.error(f"Error building site: {e}")
        raise click.ClickException(f"Error building site: {e}")

    for report in reports:
        click.echo(f"✅ {report.blueprint} -> {report.html_path}")
        for name in report.files[1:]:
            click.echo(f"  📄 {name}")
    click.echo(f"Built {len(reports)} pages")


@main.command()
@click.option("--source", "-s", type=click.Path(exists=True, file_okay=False, path_type=Path),
              default=config.source_path, help="Directory with blueprints/ and components/")
def discover(source: Path) -> None:
    """List blueprints and the pages they produce."""
    try:
        blueprints = create_store(source, source).list_blueprints()
    except WebfactoryError as e:
        raise click.ClickException(str(e))

    if not blueprints:
        click.echo("No blueprint files found")
        return

    click.echo(f"Found {len(blueprints)} blueprint files:")
    for rel_path, output in blueprints.items():
        click.echo(f"  {rel_path} -> {output}.html")


@main.command()
@click.argument("blueprint_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(blueprint_file: Path) -> None:
    """Parse a blueprint and print its component tree."""
    logger = get_logger('cli')
    logger.debug(f"Validating blueprint file: {blueprint_file}")

    try:
        tree = BlueprintParser().parse_file(blueprint_file)
    except WebfactoryError as e:
        raise click.ClickException(f"{blueprint_file} is invalid: {e}")

    for line in format_tree(tree):
        click.echo(line)
    click.echo(f"{blueprint_file} is valid ({len(tree.component_paths())} components)")


if __name__ == "__main__":
    main()
