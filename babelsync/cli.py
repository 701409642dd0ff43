"""Command-line interface for keyset synchronization."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Tuple

import click
from lxml import etree
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import Config
from .errors import ConfigError, ExtractionFailedError, ServiceError, TransportError
from .extraction.genstrings import GenstringsExtractor
from .extraction.strings_writer import StringsWriter
from .tanker.client import TankerClient
from .tanker.xml_writer import TankerXmlWriter

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _client(config: Config) -> TankerClient:
    """Build a client, raising ConfigError if the Tanker settings are incomplete."""
    errors = config.validate()
    if errors:
        raise ConfigError(errors)
    return TankerClient.from_config(config)


@contextmanager
def _reported_errors():
    """Print operational failures and abort."""
    try:
        yield
    except ConfigError as e:
        console.print("[red]Configuration errors:[/red]")
        for error in e.errors:
            console.print(f"  - {error}")
        raise click.Abort()
    except ServiceError as e:
        console.print(f"[red]Tanker error:[/red] {e.describe()}")
        raise click.Abort()
    except ExtractionFailedError as e:
        console.print(f"[red]Extraction failed:[/red] {e}")
        raise click.Abort()
    except TransportError as e:
        console.print(f"[red]Connection error:[/red] {e}")
        raise click.Abort()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a .env file with TANKER_* settings"
)
@click.option("--verbose", "-v", is_flag=True, help="Log every request")
@click.pass_context
def cli(ctx: click.Context, env_file: Optional[str], verbose: bool):
    """Sync localizable strings with a Tanker project."""
    _setup_logging(verbose)
    ctx.obj = Config.from_env(env_file)


@cli.command()
@click.pass_obj
def keysets(config: Config):
    """List the keysets of the project."""
    with _reported_errors():
        client = _client(config)
        names = client.list_keysets()

    table = Table(title=f"Keysets in {config.project_id}")
    table.add_column("Keyset", style="cyan")
    for name in names:
        table.add_row(name)
    console.print(table)


@cli.command()
@click.argument("name")
@click.pass_obj
def create(config: Config, name: str):
    """Create an empty keyset."""
    with _reported_errors():
        client = _client(config)
        client.create_keyset(name)
    console.print(f"[green]Created:[/green] {name}")


@cli.command()
@click.argument("name")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def drop(config: Config, name: str, yes: bool):
    """Delete a keyset from the project."""
    with _reported_errors():
        client = _client(config)
    if not yes and not click.confirm(f"Drop keyset {name}?"):
        console.print("[yellow]Keyset not dropped[/yellow]")
        return
    with _reported_errors():
        client.drop_keyset(name)
    console.print(f"[green]Dropped:[/green] {name}")


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the XML that would be uploaded instead of uploading it"
)
@click.pass_obj
def push(config: Config, files: Tuple[str, ...], dry_run: bool):
    """Extract strings from source files and upload them."""
    extractor = GenstringsExtractor.from_config(config)
    language = config.development_language

    console.print(f"[blue]Extracting:[/blue] {len(files)} files ({language})")
    with _reported_errors():
        extracted = extractor.run(files, language)

    if dry_run:
        writer = TankerXmlWriter()
        for keyset in extracted.values():
            click.echo(writer.keyset_to_string(keyset).decode("utf-8"))
        console.print("\n[yellow]Dry run - nothing uploaded[/yellow]")
        return

    with _reported_errors():
        client = _client(config)
        remote_names = set(client.list_keysets())
        for name, keyset in extracted.items():
            if name in remote_names:
                merged = client.load_keyset(name, config.all_languages)
                for key in keyset:
                    merged.merge_key(key)
            else:
                console.print(f"[blue]Creating:[/blue] {name}")
                client.create_keyset(name)
                merged = keyset
            client.replace_keyset(merged)
            console.print(f"[green]Uploaded:[/green] {name} ({len(merged)} keys)")


@cli.command()
@click.argument("name")
@click.option(
    "--language", "-l",
    "languages",
    multiple=True,
    help="Language to download (repeatable, defaults to all configured languages)"
)
@click.option("--status", default=None, help="Only download values with this status")
@click.option("--safe", is_flag=True, help="Ask the service for safe values")
@click.option(
    "--output", "-o",
    "output_dir",
    type=click.Path(file_okay=False),
    default=".",
    help="Directory that receives the <lang>.lproj folders"
)
@click.pass_obj
def pull(
    config: Config,
    name: str,
    languages: Tuple[str, ...],
    status: Optional[str],
    safe: bool,
    output_dir: str,
):
    """Download a keyset and write one .strings file per language."""
    languages = list(languages) or config.all_languages

    with _reported_errors():
        client = _client(config)
        keyset = client.load_keyset(name, languages, status, safe)

    if not len(keyset):
        console.print(f"[yellow]Keyset {name} is empty or unknown[/yellow]")
        return

    writer = StringsWriter()
    for language in languages:
        path = Path(output_dir) / f"{language}.lproj" / Path(name).name
        writer.write(keyset, language, str(path))
        console.print(f"[blue]Writing:[/blue] {path}")
    console.print("[green]Done![/green]")


@cli.command()
@click.option("--keyset", "keyset_name", default=None, help="Only export this keyset")
@click.option("--language", "-l", "languages", multiple=True, help="Language to export (repeatable)")
@click.option("--status", default=None, help="Only export values with this status")
@click.option("--safe", is_flag=True, help="Ask the service for safe values")
@click.pass_obj
def export(
    config: Config,
    keyset_name: Optional[str],
    languages: Tuple[str, ...],
    status: Optional[str],
    safe: bool,
):
    """Print the project export XML."""
    with _reported_errors():
        client = _client(config)
        doc = client.export_project(keyset_name, list(languages) or None, status, safe)
    if doc is not None:
        click.echo(etree.tostring(doc, pretty_print=True, encoding="unicode"))


def main():
    cli()


if __name__ == "__main__":
    main()
