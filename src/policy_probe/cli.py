from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from policy_probe.chunking import chunk_document
from policy_probe.observability.base import LoggingMetricsHook, NoOpMetricsHook
from policy_probe.parsers import extractor_for

_log = logging.getLogger(__name__)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output and metrics.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Command line tools for policy-probe."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj = {"verbose": verbose}


@main.command("chunk")
@click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option("--page", default=1, show_default=True, type=click.IntRange(min=1))
@click.option("--json", "as_json", is_flag=True, help="Print every chunk as JSON.")
@click.option("--preview", default=3, show_default=True, type=click.IntRange(min=0))
@click.pass_context
def chunk(
    ctx: click.Context, file: Path, page: int, as_json: bool, preview: int
) -> None:
    """Chunk FILE and show the result without ingesting anything."""
    metrics_hook = LoggingMetricsHook() if ctx.obj["verbose"] else NoOpMetricsHook()

    try:
        extracted = extractor_for(file.name).extract(file)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    _log.info("Read %s (%d chars)", file, len(extracted.text))
    chunks = chunk_document(extracted.text, source_page=page, metrics_hook=metrics_hook)

    if as_json:
        click.echo(json.dumps([c.to_record() for c in chunks], indent=2))
        return

    click.echo(f"Created {len(chunks)} chunks from {file.name}")
    for idx, c in enumerate(chunks[:preview], start=1):
        click.echo("")
        click.echo(f"Chunk {idx}:")
        click.echo(f'  Top Level: "{c.metadata.top_level_section}"')
        click.echo(f'  Parent: "{c.metadata.parent_heading}"')
        click.echo(f"  Path: {c.metadata.section_path}")
        click.echo(f'  Content: "{c.content[:100]}..."')


if __name__ == "__main__":
    main()
