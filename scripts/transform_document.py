#!/usr/bin/env python3
"""
Command-line interface for contract document conversion.

Subcommands:
- run: Convert a document through an explicit chain of formats
- formats: List known formats
- converters: List registered converters
- roundtrip: Validate text -> data -> text fidelity for a template
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import List

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf

from clausemark.contexts.markup import TransformError
from clausemark.contexts.templating import DraftError, ParseError, TemplateCompileError
from clausemark.contexts.transform import (
    TransformPipelineError,
    format_descriptor,
    format_names,
    list_converters,
    transform,
    validate_roundtrip,
)
from clausemark.contexts.templating.logger import setup_templating_logger
from clausemark.contexts.transform.logger import setup_transform_logger

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Convert contract documents between markdown, document trees, data and pdfmake",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def load_structured(path: Path):
    """Load a JSON or YAML file (trees, grammars, data) as plain containers."""
    return OmegaConf.to_container(OmegaConf.load(path), resolve=False)


def load_input(path: Path, format_name: str):
    if format_descriptor(format_name).file_format == "json":
        return load_structured(path)
    return path.read_text()


def dump_output(value, format_name: str) -> str:
    if format_descriptor(format_name).file_format == "json":
        return json.dumps(value, indent=2) + "\n"
    return value


@app.command("run")
def run_command(
    input_file: Path = typer.Argument(
        ...,
        help="Input document",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    source_format: str = typer.Option(..., "--from", "-f", help="Format of the input document"),
    destination_formats: List[str] = typer.Option(
        ..., "--to", "-t", help="Target format; repeat to build a chain"
    ),
    template: Path = typer.Option(
        None,
        "--template",
        help="Template grammar (JSON or YAML) for markdown <-> data hops",
        exists=True,
    ),
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path (if not specified, prints to stdout)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every intermediate result"),
):
    """
    Convert a document through an explicit chain of formats.

    Logs are saved to outs/logs/transform_TIMESTAMP/.

    Examples:\n

        $ transform_document.py run contract.json --from ciceromark --to pdfmake

        $ transform_document.py run contract.json --from ciceromark --to ciceromark_unquoted --to pdfmake

        $ transform_document.py run sale.md --from markdown --to data --template sale_grammar.json
    """
    log_dir = LOGS_PATH / f"transform_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    setup_transform_logger(log_dir, source_format, destination_formats)

    parameters = {}
    if template:
        parameters["template"] = load_structured(template)

    try:
        source = load_input(input_file, source_format)
        result = transform(
            source,
            source_format,
            destination_formats,
            parameters=parameters,
            options={"verbose": verbose},
        )
        target_format = destination_formats[-1]
        if format_descriptor(target_format).file_format == "binary":
            typer.secho(f"✗ {target_format} output requires an external renderer", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        text = dump_output(result, target_format)
    except (TransformPipelineError, TransformError, TemplateCompileError, ParseError, DraftError) as e:
        typer.secho(f"\n✗ Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output:
        output.write_text(text)
        typer.secho(f"✓ Saved {target_format} to: {output}", fg=typer.colors.GREEN)
    else:
        typer.echo(text, nl=False)

    typer.echo(f"  Log: {log_dir / 'transform.log'}", err=True)


@app.command("formats")
def formats_command():
    """
    List known formats.

    Example:\n

        $ transform_document.py formats
    """
    names = format_names()
    typer.secho(f"\nFormats ({len(names)}):", fg=typer.colors.BLUE, bold=True)
    for name in names:
        descriptor = format_descriptor(name)
        typer.echo(f"  {name:<20} {descriptor.file_format:<7} {descriptor.docs}")


@app.command("converters")
def converters_command():
    """
    List registered converters.

    Example:\n

        $ transform_document.py converters
    """
    converters = list_converters()
    typer.secho(f"\nConverters ({len(converters)}):", fg=typer.colors.BLUE, bold=True)
    for source, target, docs in converters:
        typer.echo(f"  {source:>20} -> {target:<20} {docs}")


@app.command("roundtrip")
def roundtrip_command(
    text_file: Path = typer.Argument(..., help="Contract text", exists=True, dir_okay=False),
    template: Path = typer.Option(
        ..., "--template", help="Template grammar (JSON or YAML)", exists=True
    ),
    show_diff: bool = typer.Option(False, "--diff", "-d", help="Print the unified diff"),
):
    """
    Validate text -> data -> text fidelity for a template.

    Example:\n

        $ transform_document.py roundtrip sale.md --template sale_grammar.json --diff
    """
    log_dir = LOGS_PATH / f"roundtrip_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    setup_templating_logger(log_dir, phase="roundtrip")

    typer.secho(f"\nRoundtrip: {text_file.name}\n", fg=typer.colors.BLUE, bold=True)

    result = validate_roundtrip(text_file.read_text(), load_structured(template))

    if result.error:
        typer.secho(f"✗ {result.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if result.success:
        typer.secho("✓ Text survives text -> data -> text unchanged", fg=typer.colors.GREEN)
        return

    typer.secho(f"✗ {result.num_diffs} differences", fg=typer.colors.RED)
    if show_diff:
        for line in result.diff_lines:
            typer.echo(line)
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
