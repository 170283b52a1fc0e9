"""CLI entry point for the contact card generator."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from contact_card.batch import BatchProcessor
from contact_card.builder import CardBuilder
from contact_card.exceptions import ContactCardError
from contact_card.files import write_card
from contact_card.models.contact import DEFAULT_COUNTRY
from contact_card.parsers.address import AddressParser
from contact_card.parsers.name import parse_name
from contact_card.parsers.phone import normalize_phone
from contact_card.serializer import FOLD_WIDTH, CardSerializer

app = typer.Typer(
    name="cardgen",
    help="Generate vCard contact files from loosely structured profile text.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
):
    """Generate vCard contact files from loosely structured profile text."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _create_builder(country: str, fold_width: int) -> CardBuilder:
    """Create a builder from CLI options."""
    return CardBuilder(
        address_parser=AddressParser(default_country=country),
        serializer=CardSerializer(fold_width=fold_width),
    )


def _fail(error: Exception) -> None:
    err_console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(1)


@app.command()
def build(
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Full display name")] = None,
    fallback_label: Annotated[
        Optional[str],
        typer.Option("--fallback-label", help="Name to use when --name is empty"),
    ] = None,
    title: Annotated[Optional[str], typer.Option("--title", "-t", help="Job title")] = None,
    company: Annotated[Optional[str], typer.Option("--company", "-c", help="Organization")] = None,
    email: Annotated[Optional[str], typer.Option("--email", "-e", help="Email address")] = None,
    phone: Annotated[Optional[str], typer.Option("--phone", "-p", help="Cell phone")] = None,
    address: Annotated[
        Optional[str],
        typer.Option("--address", "-a", help="Address block, plain text or HTML"),
    ] = None,
    url: Annotated[Optional[str], typer.Option("--url", help="Profile or website URL")] = None,
    photo: Annotated[Optional[str], typer.Option("--photo", help="Photo image URL")] = None,
    profile_url: Annotated[
        Optional[str],
        typer.Option("--profile-url", help="Profile page URL, stored as a note"),
    ] = None,
    note: Annotated[Optional[str], typer.Option("--note", help="Free-text note")] = None,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Directory for the .vcf file"),
    ] = Path("."),
    stdout: Annotated[
        bool,
        typer.Option("--stdout", help="Print the vCard instead of writing a file"),
    ] = False,
    country: Annotated[
        str,
        typer.Option("--country", help="Country for parsed addresses"),
    ] = DEFAULT_COUNTRY,
    fold_width: Annotated[
        int,
        typer.Option("--fold-width", help="Maximum octets per vCard line"),
    ] = FOLD_WIDTH,
):
    """Build a single vCard from field values."""
    fields = {
        "name": name,
        "fallback_label": fallback_label,
        "title": title,
        "company": company,
        "email": email,
        "phone": phone,
        "address": address,
        "url": url,
        "photo": photo,
        "profile_url": profile_url,
        "note": note,
    }
    try:
        builder = _create_builder(country, fold_width)
        card = builder.build_card({k: v for k, v in fields.items() if v is not None})

        if stdout:
            typer.echo(card.content.decode("utf-8"), nl=False)
            return

        path = write_card(card, output)
    except (ContactCardError, ValueError, OSError) as e:
        _fail(e)

    console.print(f"[green]Wrote[/green] {path}")


@app.command("parse-name")
def parse_name_command(
    full_name: Annotated[str, typer.Argument(help="Full name to split")],
    output_json: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output raw JSON instead of a table"),
    ] = False,
):
    """Split a full name into first/middle/last/suffix."""
    parsed = parse_name(full_name)
    if output_json:
        print(parsed.model_dump_json(indent=2))
    else:
        _print_fields(parsed.model_dump())


@app.command("parse-address")
def parse_address_command(
    address: Annotated[str, typer.Argument(help="Address block, plain text or HTML")],
    output_json: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output raw JSON instead of a table"),
    ] = False,
    country: Annotated[
        str,
        typer.Option("--country", help="Country for the parsed address"),
    ] = DEFAULT_COUNTRY,
):
    """Split an address block into street/city/state/zip/country."""
    parsed = AddressParser(default_country=country).parse(address)
    if output_json:
        print(parsed.model_dump_json(indent=2))
    else:
        _print_fields(parsed.model_dump())


@app.command("normalize-phone")
def normalize_phone_command(
    phone: Annotated[str, typer.Argument(help="Phone number as entered")],
):
    """Strip a phone number down to digits and '+'."""
    print(normalize_phone(phone))


def _print_fields(fields: dict[str, str]) -> None:
    """Print parsed fields as a two-column table."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    for key, value in fields.items():
        table.add_row(key, value)
    console.print(table)


@app.command()
def batch(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="JSON file with a list of field objects",
            exists=True,
            readable=True,
            dir_okay=False,
        ),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Directory for the .vcf files"),
    ],
    report: Annotated[
        Optional[Path],
        typer.Option("--report", "-r", help="Write a JSON summary to this file"),
    ] = None,
    country: Annotated[
        str,
        typer.Option("--country", help="Country for parsed addresses"),
    ] = DEFAULT_COUNTRY,
    fold_width: Annotated[
        int,
        typer.Option("--fold-width", help="Maximum octets per vCard line"),
    ] = FOLD_WIDTH,
):
    """Build one vCard per entry of a JSON file."""
    try:
        processor = BatchProcessor(_create_builder(country, fold_width))
        items = processor.load_items(input_file)
    except (ValueError, OSError) as e:
        _fail(e)

    if not items:
        console.print("[yellow]Warning:[/yellow] No entries found to process.")
        raise typer.Exit(0)

    console.print(f"Processing {len(items)} entr{'y' if len(items) == 1 else 'ies'}...")

    result = processor.process(items, output)

    if report is not None:
        report.write_text(processor.to_json(result), encoding="utf-8")

    console.print(
        f"[green]Done:[/green] {result.succeeded} succeeded, "
        f"{result.failed} failed, {result.total_time_ms:.1f}ms total"
    )
    console.print(f"Output: {output}")

    if result.failed:
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    from contact_card import __version__

    console.print(f"cardgen version {__version__}")


if __name__ == "__main__":
    app()
