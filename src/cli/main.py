"""catfacts CLI entry point."""

import sys
from pathlib import Path

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import config, fact, init, show
from cli.config import load_config
from cli.logging_config import setup_logging
from cli.utils import console


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to config YAML",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, json_logs: bool, config_path: Path | None):
    """catfacts - a random cat fact, on demand."""
    try:
        cfg = load_config(config_path)
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    level = "DEBUG" if verbose else cfg.logging.level
    setup_logging(json_mode=json_logs or cfg.logging.json_output, level=level, log_file=cfg.logging.file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    ctx.obj["config_path"] = config_path


cli.add_command(show)
cli.add_command(fact)
cli.add_command(config)
cli.add_command(init)


if __name__ == "__main__":
    cli()
