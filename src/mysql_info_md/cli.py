"""Click CLI interface for the MySQL info generator."""

import logging
import sys
from pathlib import Path

import click

from . import SUPPORTED_TARGETS, __version__
from .backends import get_backend
from .base.models import PublishingTarget, RenderOptions
from .config import InfoConfig
from .exceptions import (
    BackendNotAvailableError,
    ConfigurationError,
    ConnectionError,
    MySqlInfoError,
)
from .generators import DocumentSetBuilder, PathResolver
from .sinks import FileSystemSink


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def connection_options(func):
    """Shared MySQL connection options."""
    options = [
        click.option("-h", "--host", envvar="DB_HOST", help="Database server hostname"),
        click.option("-P", "--port", type=int, envvar="DB_PORT", help="Database server port"),
        click.option("-d", "--database", envvar="DB_NAME", help="Database name"),
        click.option("-u", "--username", envvar="DB_USER", help="Database username"),
        click.option("-p", "--password", envvar="DB_PASSWORD", help="Database password"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
def cli():
    """MySQL Info MD - Document a MySQL database as cross-linked markdown.

    Targets: standalone file tree, platform wiki, embedded wiki
    """
    pass


@cli.command()
@click.option("--target", "-t", type=click.Choice(SUPPORTED_TARGETS, case_sensitive=False),
              default="standalone", help="Publishing target")
@connection_options
@click.option("-r", "--root", default=".", type=click.Path(file_okay=False),
              help="Document root; must exist unless --create-root is given")
@click.option("--path", "publish_path", help="Publish directory below the document root")
@click.option("--image-path", help="Image directory (root-absolute for the embedded wiki)")
@click.option("--overview-name", help="Name of the overview document")
@click.option("--toc-name", help="Name of the table of contents document")
@click.option("--no-index-link", is_flag=True, help="Omit the link to the overview on detail pages")
@click.option("--subfolders", is_flag=True, help="Group documents into one folder per kind")
@click.option("--create-stmt", is_flag=True, help="Append CREATE statements of tables and views")
@click.option("--toc", is_flag=True, help="Write a table of contents document")
@click.option("--create-root", is_flag=True, help="Create the document root if it does not exist")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option("--dry-run", is_flag=True, help="Preview without writing files")
def generate(
    target: str,
    host: str | None,
    port: int | None,
    database: str | None,
    username: str | None,
    password: str | None,
    root: str,
    publish_path: str | None,
    image_path: str | None,
    overview_name: str | None,
    toc_name: str | None,
    no_index_link: bool,
    subfolders: bool,
    create_stmt: bool,
    toc: bool,
    create_root: bool,
    verbose: int,
    dry_run: bool,
) -> None:
    """Read the database catalog and write the markdown documents."""
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    options = RenderOptions.NONE
    for enabled, flag in (
        (no_index_link, RenderOptions.SUPPRESS_BACKLINK),
        (subfolders, RenderOptions.GROUP_BY_KIND),
        (create_stmt, RenderOptions.INCLUDE_DDL),
        (toc, RenderOptions.EMIT_TOC),
    ):
        if enabled:
            options |= flag

    try:
        config = InfoConfig(
            target=target,
            options=options,
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
            root=Path(root),
            path=publish_path,
            image_path=image_path,
            overview_name=overview_name,
            toc_name=toc_name,
            create_root=create_root,
            dry_run=dry_run,
            verbosity=verbose,
        )
        config.validate()

        # Path and option errors surface here, before connecting
        resolver = PathResolver.from_config(config)
        sink = FileSystemSink(
            config.root,
            resolver.publish_path,
            create_root=config.create_root,
            dry_run=config.dry_run,
        )

        ConnectionClass, ReaderClass = get_backend("mysql")
        with ConnectionClass(config) as conn:
            builder = DocumentSetBuilder(ReaderClass(conn, config), config)
            click.echo(f"Generating {config.target.value} documentation...")
            written = builder.publish(sink)

        if dry_run:
            click.echo(f"\n[DRY RUN] Would create {len(written)} files in {sink.publish_dir}")
        else:
            click.echo(f"\nCreated {len(written)} files in {sink.publish_dir}")

    except BackendNotAvailableError as e:
        click.echo(f"Backend not available: {e}", err=True)
        sys.exit(1)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except ConnectionError as e:
        click.echo(f"Connection error: {e}", err=True)
        sys.exit(1)
    except MySqlInfoError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


@cli.command()
def targets() -> None:
    """List publishing targets and their default layout."""
    for target in PublishingTarget:
        resolver = PathResolver(target)
        click.echo(f"{target.value}:")
        click.echo(f"  overview: {resolver.overview_path()}")
        click.echo(f"  toc:      {resolver.toc_path()}")
        click.echo(f"  images:   {resolver.image_path()}")


@cli.command("test-connection")
@connection_options
def test_connection(
    host: str | None,
    port: int | None,
    database: str | None,
    username: str | None,
    password: str | None,
) -> None:
    """Test database connection."""
    try:
        config = InfoConfig(
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
        )
        config.validate()

        ConnectionClass, _ = get_backend("mysql")

        click.echo("Connecting to MySQL database...")
        with ConnectionClass(config) as conn:
            version = conn.get_version()
            click.echo("Connection successful!")
            click.echo(f"\nServer version:\n{version}")

    except BackendNotAvailableError as e:
        click.echo(f"Backend not available: {e}", err=True)
        sys.exit(1)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except ConnectionError as e:
        click.echo(f"Connection failed: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
