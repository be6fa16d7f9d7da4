"""
X1 Dashboard CLI - Run the metrics API or take a one-off snapshot of the network
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, Iterable, Tuple

import click
import uvicorn
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import Config
from .constants.polling import ALL_METRICS
from .utils.handlers import build_handlers
from .utils.logging_config import setup_logging
from .utils.models import RequestContext
from .utils.x1_error import X1Error
from .utils.x1_rpc import X1RpcClient

# Set up logger
logger = logging.getLogger("x1_dashboard.cli")

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, debug, no_color):
    """X1 Dashboard - live network metrics for the X1 blockchain"""
    setup_logging('x1_dashboard', logging.DEBUG if debug else None)

    ctx.ensure_object(dict)
    ctx.obj['console'] = Console(color_system=None if no_color else "auto")
    ctx.obj['debug'] = debug


@cli.command()
@click.option('--host', default=Config.HOST, show_default=True, help='Interface to bind')
@click.option('--port', default=Config.PORT, show_default=True, type=int, help='Port to listen on')
@click.option('--reload', is_flag=True, help='Reload on code changes')
@click.pass_context
def serve(ctx, host, port, reload):
    """Run the metrics API"""
    ctx.obj['console'].print(f"[green]Serving X1 metrics on http://{host}:{port}[/green]")
    uvicorn.run("x1_dashboard.main:app", host=host, port=port, reload=reload)


async def _collect(endpoint: str, metrics: Iterable[str]) -> Tuple[Dict[str, Any], Dict[str, str]]:
    client = X1RpcClient(endpoint)
    try:
        handlers = build_handlers(client)
        results: Dict[str, Any] = {}
        errors: Dict[str, str] = {}
        for metric in metrics:
            try:
                snapshot = await handlers[metric].fetch(RequestContext.new(metric))
                results[metric] = snapshot.to_dict()
            except X1Error as e:
                errors[metric] = str(e)
        return results, errors
    finally:
        await client.close()


@cli.command()
@click.option('--metric', '-m', 'metrics', multiple=True, type=click.Choice(ALL_METRICS),
              help='Metric to fetch (repeatable, default all)')
@click.option('--endpoint', default=Config.RPC_ENDPOINT, show_default=True, help='RPC endpoint')
@click.pass_context
def snapshot(ctx, metrics, endpoint):
    """Fetch metrics once and print them as JSON"""
    console = ctx.obj['console']
    selected = metrics or ALL_METRICS

    results, errors = asyncio.run(_collect(endpoint, selected))

    if results:
        console.print_json(json.dumps(results))
    for metric, error in errors.items():
        console.print(f"[red]Error fetching {metric}: {escape(error)}[/red]")

    if errors:
        sys.exit(1)


if __name__ == '__main__':
    cli(obj={})
