"""CLI commands for running and inspecting the content inventory."""

import json
import logging
import os
from pathlib import Path

import click

from config.settings import settings
from inventory.guardrails import validate_assessment
from inventory.models import Entity
from inventory.persistence import RecordStore, StoreError, create_file_store
from inventory.table import filter_records


def _get_store(data_dir: str | None) -> RecordStore:
    """Create a RecordStore over the configured data directory."""
    return create_file_store(Path(data_dir) if data_dir else settings.data_dir)


@click.group()
@click.option("--data-dir", default=None, help="Directory holding the entity JSON files")
@click.pass_context
def cli(ctx: click.Context, data_dir: str | None):
    """Manage the content inventory."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s"
    )
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to HOST)")
@click.option("--port", default=None, type=int, help="Listening port (defaults to PORT, 3000)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool):
    """Run the API server and static site."""
    import uvicorn

    data_dir = ctx.obj["data_dir"]
    if data_dir:
        # Reload workers import api.main afresh and read settings from the environment
        os.environ["DATA_DIR"] = str(Path(data_dir))

    if reload:
        target = "api.main:app"
    else:
        from api.main import create_app
        target = create_app(store=_get_store(data_dir))

    uvicorn.run(
        target,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command()
@click.argument("entity", type=click.Choice([e.value for e in Entity]))
@click.option("--query", "-q", default="", help="Keyword filter on process name, content and location")
@click.pass_context
def show(ctx: click.Context, entity: str, query: str):
    """Print the records of ENTITY as JSON."""
    store = _get_store(ctx.obj["data_dir"])
    try:
        records = store.list(entity)
    except StoreError as e:
        raise click.ClickException(str(e))

    if query:
        records = filter_records(records, query)
    click.echo(json.dumps(records, indent=2, ensure_ascii=False))


@cli.command()
@click.pass_context
def check(ctx: click.Context):
    """Validate every stored assessment."""
    store = _get_store(ctx.obj["data_dir"])
    try:
        records = store.list(Entity.ASSESSMENTS)
    except StoreError as e:
        raise click.ClickException(str(e))

    invalid = 0
    for record in records:
        result = validate_assessment(record)
        record_id = record.get("id", "?") if isinstance(record, dict) else "?"
        for error in result.errors:
            click.echo(f"ERROR   {record_id}: {error}")
        for warning in result.warnings:
            click.echo(f"WARNING {record_id}: {warning}")
        if not result.is_valid:
            invalid += 1

    click.echo(f"{len(records)} record(s) checked, {invalid} invalid")
    if invalid:
        ctx.exit(1)


if __name__ == "__main__":
    cli()
