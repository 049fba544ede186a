"""Config command implementation"""

from __future__ import annotations

import typer
from rich.table import Table

from agentc.cli.build import load_context_config
from agentc.config import get_project_config_path, get_user_config_path, init_project_config
from agentc.utils.console import console, display_path, print_info, print_success

app = typer.Typer(help="Configuration management")


@app.command()
def init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create a project configuration file"""
    project = (ctx.obj or {}).get("project")
    config_path = get_project_config_path(project)

    if config_path.exists() and not force:
        print_info(f"Config already exists at: {config_path}")
        print_info("Use --force to overwrite")
        return

    created_path = init_project_config(project, force=force)
    print_success(f"Created config at: {created_path}")


@app.command()
def show(ctx: typer.Context) -> None:
    """Show current configuration"""
    config = load_context_config(ctx)
    root = config.project_root

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for name, value in config.settings.model_dump().items():
        table.add_row(f"settings.{name}", str(value))

    table.add_row("project_root", str(root))
    table.add_row("agents source", display_path(config.agents_source_dir, root))
    table.add_row("agents output", display_path(config.agents_output_dir, root))
    table.add_row("skills source", display_path(config.skills_source_dir, root))
    table.add_row("skills output", display_path(config.skills_output_dir, root))

    console.print(table)


@app.command()
def path(ctx: typer.Context) -> None:
    """Show configuration file paths"""
    obj = ctx.obj or {}
    user_path = get_user_config_path()
    project_path = obj.get("config") or get_project_config_path(obj.get("project"))

    console.print(f"[bold]User config:[/bold] {user_path}")
    console.print(f"  Exists: {'[green]Yes[/green]' if user_path.exists() else '[red]No[/red]'}")

    console.print(f"\n[bold]Project config:[/bold] {project_path}")
    console.print(f"  Exists: {'[green]Yes[/green]' if project_path.exists() else '[red]No[/red]'}")
