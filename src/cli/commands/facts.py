"""Fact CLI commands."""

import asyncio
import json
import sys
from typing import Awaitable, Callable, Optional

import click
import structlog
from rich.console import Console
from rich.markup import escape

from cli.config_models import CatFactsConfig
from cli.line_input import StdinLines
from cli.screen import HINT, FactScreen
from cli.utils import build_client, build_screen, console
from facts.client import FactClient
from facts.models import Fact, FactError
from observability import log_run_summary

logger = structlog.get_logger(source="cli_facts")

QUIT_COMMANDS = {"q", "quit", "exit"}
NEW_FACT_COMMANDS = {"", "n", "new"}

LineReader = Callable[[], Awaitable[Optional[str]]]


async def run_screen(
    config: CatFactsConfig,
    client: Optional[FactClient] = None,
    read_line: Optional[LineReader] = None,
    out: Optional[Console] = None,
) -> FactScreen:
    """Drive a FactScreen from line input until quit or EOF."""
    stdin = None
    if read_line is None:
        stdin = StdinLines()
        stdin.start()
        read_line = stdin.read_line

    async with (client or build_client(config)) as fact_client:
        screen = build_screen(config, client=fact_client, out=out)
        screen.start()
        try:
            while True:
                line = await read_line()
                if line is None:
                    break
                command = line.strip().lower()
                if command in QUIT_COMMANDS:
                    break
                if command in NEW_FACT_COMMANDS:
                    screen.press()
                else:
                    (out or console).print(f"[dim]Unknown command {escape(repr(command))}. {HINT}[/]")
        finally:
            if stdin is not None:
                stdin.close()
            screen.close()
            await screen.scope.wait()
    return screen


async def fetch_one(config: CatFactsConfig, client: Optional[FactClient] = None) -> Fact:
    async with (client or build_client(config)) as fact_client:
        return await fact_client.fetch_fact()


@click.command()
@click.pass_context
def show(ctx: click.Context):
    """Show a cat fact. Enter loads a new one, q quits."""
    config = ctx.obj["config"]
    try:
        asyncio.run(run_screen(config))
    except KeyboardInterrupt:
        console.print("\n[yellow]Bye[/]")
    finally:
        log_run_summary()


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
def fact(ctx: click.Context, as_json: bool):
    """Fetch a single cat fact and print it."""
    config = ctx.obj["config"]
    try:
        result = asyncio.run(fetch_one(config))
    except FactError as e:
        logger.debug("fact_command_failed", error=str(e))
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)
    finally:
        log_run_summary()

    if as_json:
        click.echo(json.dumps({"fact": result.text}))
    else:
        console.print(result.text, soft_wrap=True, markup=False, highlight=False)
