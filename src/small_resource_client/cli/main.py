"""Main CLI entry point."""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from small_resource_client import __version__
from small_resource_client.client.config import ResourceClientConfig

# Load .env from cwd
_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)


@click.group()
@click.version_option(version=__version__, prog_name="small-resource")
@click.option("--verbose", "-v", is_flag=True, help="Log every exchange with the server")
def cli(verbose: bool):
    """Small Resource CLI - Read, lock and update shared resources."""
    try:
        config = ResourceClientConfig()
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        raise click.Abort()

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def setup_cli():
    """Register all commands."""
    from .resources import create, lock, read, unlock, write

    cli.add_command(create)
    cli.add_command(read)
    cli.add_command(lock)
    cli.add_command(write)
    cli.add_command(unlock)


setup_cli()


def main():
    """Entry point for small-resource CLI."""
    cli()


if __name__ == "__main__":
    main()
