"""Build, check, clean and list commands"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from agentc.config import Config, load_config
from agentc.core import (
    AgentcError,
    BuildReport,
    CompileResult,
    check_outputs,
    clean_outputs,
    compile_agent,
    compile_everything,
    list_agents,
    list_skills,
)
from agentc.utils.console import (
    console,
    display_path,
    print_diagnostic,
    print_dim,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def load_context_config(ctx: typer.Context) -> Config:
    """Load configuration using the global CLI options"""
    obj = ctx.obj or {}
    project = obj.get("project")
    try:
        return load_config(project_root=project, project_config_path=obj.get("config"))
    except ValidationError as e:
        print_error(f"Invalid configuration:\n{e}")
        raise typer.Exit(1)


def _print_result(result: CompileResult, config: Config, verbose: bool) -> None:
    root = config.project_root
    label = "skill" if result.kind == "skill" else "agent"
    name = result.source.parent.name if result.kind == "skill" else result.source.name

    print_info(f"Compiling {label}: {name}...")
    for diagnostic in result.diagnostics:
        print_diagnostic(diagnostic, root)
    if verbose:
        for included in result.included:
            print_dim(f"  included {display_path(included, root)}")

    if result.written:
        state = "Created" if result.changed else "Unchanged"
        print_success(f"{state} {display_path(result.output, root)}")


def _print_report(report: BuildReport, config: Config, verbose: bool) -> None:
    for result in report.results:
        _print_result(result, config, verbose)
    for note in report.notes:
        print_info(note)
    for failure in report.failures:
        print_error(str(failure))


def build(
    ctx: typer.Context,
    source: Optional[Path] = typer.Argument(None, help="Single agent source to compile"),
    agents_only: bool = typer.Option(False, "--agents-only", help="Skip skills"),
    skills_only: bool = typer.Option(False, "--skills-only", help="Skip agents"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Compile without writing"),
    strict: bool = typer.Option(False, "--strict", help="Fail if any include cannot be resolved"),
) -> None:
    """Compile agent sources and skills into the output tree.

    Examples:
        agentc build                              # agents, then skills
        agentc build .claude-src/agents/react.src.md
        agentc build --skills-only --dry-run
    """
    config = load_context_config(ctx)
    verbose = (ctx.obj or {}).get("verbose", False)
    if strict:
        config.settings.strict = True

    if agents_only and skills_only:
        print_error("--agents-only and --skills-only are mutually exclusive")
        raise typer.Exit(2)

    write = not dry_run

    if source is not None:
        try:
            result = compile_agent(source, config, write=write)
        except AgentcError as e:
            print_error(str(e))
            raise typer.Exit(1)
        _print_result(result, config, verbose)
        if dry_run:
            print_dim(f"Would write {display_path(result.output, config.project_root)}")
        if config.settings.strict and result.has_errors:
            raise typer.Exit(1)
        return

    try:
        report = compile_everything(
            config, write=write, agents=not skills_only, skills=not agents_only
        )
    except AgentcError as e:
        print_error(str(e))
        raise typer.Exit(1)

    _print_report(report, config, verbose)

    if dry_run:
        for result in report.stale:
            print_dim(f"Would write {display_path(result.output, config.project_root)}")

    if not report.ok:
        print_error("Build failed")
        raise typer.Exit(1)

    if report.results:
        print_success(f"All {len(report.results)} outputs compiled successfully!")


def check(ctx: typer.Context) -> None:
    """Fail if any compiled output is missing or out of date"""
    config = load_context_config(ctx)

    try:
        report = check_outputs(config)
    except AgentcError as e:
        print_error(str(e))
        raise typer.Exit(1)

    for failure in report.failures:
        print_error(str(failure))
    for diagnostic in report.diagnostics:
        print_diagnostic(diagnostic, config.project_root)

    stale = report.stale
    for result in stale:
        print_warning(f"Out of date: {display_path(result.output, config.project_root)}")

    if stale or not report.ok:
        if stale:
            print_error(f"{len(stale)} output(s) need rebuilding; run `agentc build`")
        raise typer.Exit(1)

    print_success(f"All {len(report.results)} outputs are up to date")


def clean(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Only list what would be removed"),
) -> None:
    """Remove compiled outputs whose source was deleted"""
    config = load_context_config(ctx)

    try:
        removed = clean_outputs(config, dry_run=dry_run)
    except AgentcError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not removed:
        print_info("Nothing to clean")
        return

    verb = "Would remove" if dry_run else "Removed"
    for path in removed:
        print_success(f"{verb} {display_path(path, config.project_root)}")


def list_cmd(ctx: typer.Context) -> None:
    """List compiled agents and skills"""
    config = load_context_config(ctx)

    try:
        agents = list_agents(config)
    except AgentcError as e:
        print_error(str(e))
        raise typer.Exit(1)
    skills = list_skills(config)

    if not agents and not skills:
        print_info("No compiled agents or skills found; run `agentc build`")
        return

    if agents:
        table = Table(title="Agents")
        table.add_column("Name", style="cyan")
        table.add_column("Model", style="green")
        table.add_column("Tools")
        table.add_column("Description", overflow="fold")
        for agent in agents:
            table.add_row(
                escape(agent.name),
                escape(agent.model or "-"),
                escape(", ".join(agent.tools) or "-"),
                escape(agent.description or "-"),
            )
        console.print(table)

    if skills:
        table = Table(title="Skills")
        table.add_column("Skill", style="cyan")
        table.add_column("File")
        for path in skills:
            table.add_row(escape(path.parent.name), escape(display_path(path, config.project_root)))
        console.print(table)
