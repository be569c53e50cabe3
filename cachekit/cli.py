"""
Command-line interface for cachekit file cache maintenance.

This module provides CLI commands for cache folder operations including:
- cache-stats: Display statistics of a cache folder
- clear-cache: Delete every entry of a cache folder
- get: Print an entry
- put: Store an entry
- delete: Delete an entry
"""

import json
import logging
from pathlib import Path
from typing import BinaryIO, Optional

import click

from cachekit.cache import Directory, FileCache
from cachekit.cache.directory import default_file_cache_config
from cachekit.config import CacheKitConfig, FileCacheConfig, get_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def cache_options(func):
    """Attach the options that locate a cache folder."""
    func = click.option(
        '--root-dir',
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help='Override the scope root directory (default: from config)'
    )(func)
    func = click.option(
        '--scope', '-s',
        type=click.Choice([d.value for d in Directory], case_sensitive=False),
        default=Directory.CACHE.value,
        show_default=True,
        help='Storage scope of the cache folder'
    )(func)
    func = click.option(
        '--folder', '-f',
        required=True,
        help='Cache folder name under the root folder'
    )(func)
    return func


def open_cache(folder: str, scope: str, root_dir: Optional[Path]) -> FileCache:
    """Build a FileCache for the given folder, honoring a root override."""
    config = default_file_cache_config()
    if root_dir is not None:
        config = FileCacheConfig(
            documents_root=root_dir,
            caches_root=root_dir,
            root_folder=config.root_folder,
        )
    return FileCache(folder, Directory(scope.lower()), config=config)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def cli(verbose: bool):
    """
    cachekit CLI.

    Command-line tools for inspecting and maintaining file cache folders.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")
        return

    level = CacheKitConfig.from_settings(get_settings()).log_level.upper()
    try:
        logging.getLogger().setLevel(level)
    except ValueError:
        raise click.BadParameter(
            f"Unknown log level '{level}'", param_hint="CACHEKIT_LOG_LEVEL"
        ) from None


@cli.command('cache-stats')
@cache_options
@click.option(
    '--json',
    'output_json',
    is_flag=True,
    help='Output statistics as JSON'
)
def cache_stats_command(folder: str, scope: str, root_dir: Optional[Path], output_json: bool):
    """
    Display statistics of a cache folder.

    Examples:

        \b
        # Display statistics of the ProfileStore folder
        python -m cachekit.cli cache-stats -f ProfileStore

        \b
        # Output as JSON
        python -m cachekit.cli cache-stats -f ProfileStore --json
    """
    with open_cache(folder, scope, root_dir) as cache:
        stats = cache.stats()

    if output_json:
        click.echo(json.dumps(stats, indent=2))
        return

    click.echo(click.style("Cache Statistics", fg='blue', bold=True))
    click.echo()
    click.echo(f"  Scope: {scope}")
    click.echo(f"  Total entries: {stats['size']}")
    click.echo(f"  Disk usage: {stats['volume'] / (1024 * 1024):.2f} MB")
    click.echo(f"  Cache directory: {stats['directory']}")


@cli.command('clear-cache')
@cache_options
@click.option(
    '--force',
    is_flag=True,
    help='Skip confirmation prompt'
)
def clear_cache_command(folder: str, scope: str, root_dir: Optional[Path], force: bool):
    """
    Delete every entry of a cache folder.

    This operation is irreversible.

    Examples:

        \b
        # Clear with confirmation
        python -m cachekit.cli clear-cache -f ProfileStore

        \b
        # Clear without confirmation
        python -m cachekit.cli clear-cache -f ProfileStore --force
    """
    with open_cache(folder, scope, root_dir) as cache:
        stats = cache.stats()
        click.echo(f"Current entries: {stats['size']} in {stats['directory']}")

        if not force and not click.confirm("Are you sure you want to delete ALL entries?"):
            click.echo("Operation cancelled.")
            return

        cache.clear()
        click.echo(click.style("Cache cleared successfully!", fg='green', bold=True))
        click.echo(f"Current entries: {cache.stats()['size']}")


@cli.command('get')
@cache_options
@click.argument('filename')
def get_command(folder: str, scope: str, root_dir: Optional[Path], filename: str):
    """Print the raw content of an entry."""
    with open_cache(folder, scope, root_dir) as cache:
        data = cache.get_data(filename)

    if data is None:
        raise click.ClickException(f"No entry named '{filename}' in folder '{folder}'")
    click.echo(data, nl=False)


@cli.command('put')
@cache_options
@click.argument('filename')
@click.argument('source', type=click.File('rb'), default='-')
def put_command(folder: str, scope: str, root_dir: Optional[Path], filename: str, source: BinaryIO):
    """
    Store SOURCE (a file, or stdin by default) as an entry.

    Examples:

        \b
        python -m cachekit.cli put -f ProfileStore profile.json ./profile.json
        echo hello | python -m cachekit.cli put -f Notes greeting.txt
    """
    data = source.read()
    with open_cache(folder, scope, root_dir) as cache:
        cache.save(data, filename, is_asynchronous=False)
        if cache.get_data(filename) != data:
            raise click.ClickException(f"Could not write '{filename}'. See logs for details.")
    click.echo(f"Stored {len(data)} bytes as {filename}")


@cli.command('delete')
@cache_options
@click.argument('filename')
def delete_command(folder: str, scope: str, root_dir: Optional[Path], filename: str):
    """Delete an entry. Deleting a missing entry is not an error."""
    with open_cache(folder, scope, root_dir) as cache:
        cache.delete(filename)
    click.echo(f"Deleted {filename}")


if __name__ == '__main__':
    cli()
