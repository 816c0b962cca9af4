"""Config CLI commands."""

from pathlib import Path

import click
import yaml

from cli.config_models import CatFactsConfig
from cli.utils import console

DEFAULT_CONFIG_PATH = Path.home() / ".catfacts" / "config.yaml"


@click.command()
@click.pass_context
def config(ctx: click.Context):
    """Show the effective configuration."""
    cfg: CatFactsConfig = ctx.obj["config"]
    source = ctx.obj.get("config_path") or "defaults / auto-discovered file"
    console.print(f"[dim]# source: {source}[/]")
    console.print(yaml.safe_dump(cfg.to_dict(), default_flow_style=False, sort_keys=False), markup=False)


@click.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Where to write the config (default: {DEFAULT_CONFIG_PATH})",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(path: Path | None, force: bool):
    """Write a default config file."""
    path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists:[/] {path} (use --force to overwrite)")
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(CatFactsConfig().to_dict(), f, default_flow_style=False, sort_keys=False)
    console.print(f"[green]✓[/] Created config: {path}")
