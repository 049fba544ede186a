"""CLI main entry point"""

import typer
from typing import Optional
from pathlib import Path

from agentc.utils.console import set_quiet

# Enable -h as alias for --help
app = typer.Typer(
    name="agentc",
    help="agentc - compile agent and skill prompts with @include() support",
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

# Import and register subcommands
from agentc.cli import build, config_cmd

app.command("build")(build.build)
app.command("check")(build.check)
app.command("clean")(build.clean)
app.command("list")(build.list_cmd)
app.add_typer(config_cmd.app, name="config")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List included files"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show warnings and errors"),
    project: Optional[Path] = typer.Option(
        None, "--project", "-P", help="Project directory (default: current directory)"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to project configuration file"
    ),
) -> None:
    """agentc - agent prompt compiler"""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose and not quiet
    ctx.obj["quiet"] = quiet
    ctx.obj["project"] = project
    ctx.obj["config"] = config
    set_quiet(quiet)


@app.command()
def version() -> None:
    """Show version information"""
    from agentc import __version__
    from agentc.utils.console import console

    console.print(f"[bold green]agentc[/bold green] version {__version__}")


def cli() -> None:
    """CLI entry point"""
    app()


if __name__ == "__main__":
    cli()
