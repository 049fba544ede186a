"""Compile agent and skill sources into the output tree"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from ..config.schema import Config
from .errors import CompileError, ConfigError
from .frontmatter import AgentInfo, load_agent_info
from .includes import Diagnostic, resolve_file


@dataclass
class CompileResult:
    """Outcome of compiling one source"""

    kind: str  # "agent" | "skill"
    source: Path
    output: Path
    content: str
    changed: bool
    written: bool = False
    included: list[Path] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)


@dataclass
class BuildReport:
    """Results of a multi-file build"""

    results: list[CompileResult] = field(default_factory=list)
    failures: list[CompileError] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    strict: bool = False

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for r in self.results for d in r.diagnostics]

    @property
    def ok(self) -> bool:
        if self.failures:
            return False
        if self.strict and any(r.has_errors for r in self.results):
            return False
        return True

    @property
    def stale(self) -> list[CompileResult]:
        return [r for r in self.results if r.changed]

    def extend(self, other: "BuildReport") -> None:
        self.results.extend(other.results)
        self.failures.extend(other.failures)
        self.notes.extend(other.notes)


def _check_layout(config: Config) -> None:
    if config.agents_source_dir.resolve() == config.agents_output_dir.resolve():
        raise ConfigError(
            f"Agents source and output directories are the same: {config.agents_output_dir}"
        )
    if config.skills_source_dir.resolve() == config.skills_output_dir.resolve():
        raise ConfigError(
            f"Skills source and output directories are the same: {config.skills_output_dir}"
        )


def output_name(source: Path, config: Config) -> str:
    """Map ``<name>.src.md`` to ``<name>.md``."""
    suffix = config.settings.source_suffix
    name = source.name
    if name.endswith(suffix):
        return name[: -len(suffix)] + config.settings.output_suffix
    return name


def _read_existing(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


MANIFEST_FILE = ".agentc-manifest.yaml"


def manifest_path(config: Config) -> Path:
    """Where the record of produced outputs lives"""
    return config.output_root / MANIFEST_FILE


def load_manifest(config: Config) -> dict[str, dict[str, str]]:
    """Outputs agentc has written, keyed by path relative to the output root.

    Each entry holds the ``kind`` and the absolute ``source`` it came from.
    A missing or unreadable manifest is treated as empty, so nothing is
    considered produced by agentc.
    """
    path = manifest_path(config)
    if not path.is_file():
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return {}

    if not isinstance(data, dict):
        return {}

    entries: dict[str, dict[str, str]] = {}
    for key, value in data.items():
        if not isinstance(key, str) or not isinstance(value, dict):
            continue
        source = value.get("source")
        if not isinstance(source, str) or not source:
            continue
        entries[key] = {"kind": str(value.get("kind", "agent")), "source": source}
    return entries


def save_manifest(config: Config, entries: dict[str, dict[str, str]]) -> None:
    """Write the manifest, removing it when no entries remain"""
    path = manifest_path(config)
    try:
        if not entries:
            if path.exists():
                path.unlink()
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write("# Written by agentc; lists generated files that `agentc clean` may remove.\n")
            yaml.safe_dump(dict(sorted(entries.items())), f, default_flow_style=False)
    except OSError as e:
        raise CompileError(f"Error writing {path}: {e}", path=path) from e


def _manifest_key(config: Config, output: Path) -> Optional[str]:
    try:
        return output.resolve().relative_to(config.output_root.resolve()).as_posix()
    except ValueError:
        return None


def _record_output(config: Config, kind: str, source: Path, output: Path) -> None:
    key = _manifest_key(config, output)
    if key is None:
        return
    entries = load_manifest(config)
    entry = {"kind": kind, "source": str(source.resolve())}
    if entries.get(key) != entry:
        entries[key] = entry
        save_manifest(config, entries)


def _compile(
    kind: str, source: Path, output: Path, config: Config, write: bool
) -> CompileResult:
    try:
        resolved = resolve_file(source)
    except (OSError, UnicodeDecodeError) as e:
        raise CompileError(f"Error compiling {source}: {e}", path=source) from e

    changed = _read_existing(output) != resolved.content
    result = CompileResult(
        kind=kind,
        source=source,
        output=output,
        content=resolved.content,
        changed=changed,
        included=resolved.included,
        diagnostics=resolved.diagnostics,
    )

    if write:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(resolved.content, encoding="utf-8")
        except OSError as e:
            raise CompileError(f"Error writing {output}: {e}", path=output) from e
        result.written = True
        _record_output(config, kind, source, output)

    return result


def compile_agent(source: Path, config: Config, write: bool = True) -> CompileResult:
    """
    Compile a single agent source.

    Args:
        source: Path to a ``.src.md`` file (anywhere on disk)
        config: Loaded configuration
        write: If False, compute the result without touching disk

    Returns:
        CompileResult for the agent

    Raises:
        CompileError: If the source cannot be read or the output written
        ConfigError: If the output would overwrite the source itself
    """
    _check_layout(config)
    source = Path(source)
    output = config.agents_output_dir / output_name(source, config)
    if output.resolve() == source.resolve():
        raise ConfigError(f"Output would overwrite its own source: {source}")
    return _compile("agent", source, output, config, write)


def compile_skill(skill_dir: Path, config: Config, write: bool = True) -> CompileResult:
    """
    Compile a skill directory's source into ``<skills_out>/<skill>/SKILL.md``.

    Raises:
        CompileError: If the source cannot be read or the output written
    """
    _check_layout(config)
    skill_dir = Path(skill_dir)
    source = skill_dir / config.settings.skill_source
    output = config.skills_output_dir / skill_dir.name / config.settings.skill_output
    return _compile("skill", source, output, config, write)



def discover_agent_sources(config: Config) -> list[Path]:
    """List agent sources, sorted by file name."""
    directory = config.agents_source_dir
    if not directory.is_dir():
        raise CompileError(f"Agents source directory not found: {directory}", path=directory)

    suffix = config.settings.source_suffix
    return sorted(p for p in directory.iterdir() if p.is_file() and p.name.endswith(suffix))


def discover_skills(config: Config) -> list[Path]:
    """List skill directories that contain a skill source, sorted by name."""
    directory = config.skills_source_dir
    if not directory.is_dir():
        raise CompileError(f"Skills source directory not found: {directory}", path=directory)

    return sorted(
        p
        for p in directory.iterdir()
        if p.is_dir() and (p / config.settings.skill_source).is_file()
    )


def compile_all_agents(config: Config, write: bool = True) -> BuildReport:
    """Compile every agent source. A failing source does not stop the others."""
    report = BuildReport(strict=config.settings.strict)
    sources = discover_agent_sources(config)

    if not sources:
        report.notes.append(f"No {config.settings.source_suffix} files found in sources directory")
        return report

    for source in sources:
        try:
            report.results.append(compile_agent(source, config, write=write))
        except CompileError as e:
            report.failures.append(e)

    return report


def compile_all_skills(config: Config, write: bool = True) -> BuildReport:
    """Compile every skill. A failing skill does not stop the others."""
    report = BuildReport(strict=config.settings.strict)
    skills = discover_skills(config)

    if not skills:
        report.notes.append("No skills found to compile")
        return report

    for skill_dir in skills:
        try:
            report.results.append(compile_skill(skill_dir, config, write=write))
        except CompileError as e:
            report.failures.append(e)

    return report


def compile_everything(
    config: Config,
    write: bool = True,
    agents: bool = True,
    skills: bool = True,
) -> BuildReport:
    """Compile agents, then skills.

    A missing agents directory is a failure; a missing skills directory is
    only noted, since plenty of projects define agents alone.
    """
    report = BuildReport(strict=config.settings.strict)

    if agents:
        try:
            report.extend(compile_all_agents(config, write=write))
        except CompileError as e:
            report.failures.append(e)

    if skills:
        if config.skills_source_dir.is_dir():
            report.extend(compile_all_skills(config, write=write))
        else:
            report.notes.append("No skills found to compile")

    return report


def check_outputs(config: Config) -> BuildReport:
    """Compile everything without writing; ``report.stale`` lists outdated outputs."""
    return compile_everything(config, write=False)


def _orphan_entries(config: Config) -> list[tuple[str, Path]]:
    orphans: list[tuple[str, Path]] = []
    for key, entry in sorted(load_manifest(config).items()):
        output = config.output_root / key
        if not output.is_file() or Path(entry["source"]).is_file():
            continue
        orphans.append((key, output.parent if entry["kind"] == "skill" else output))
    return orphans


def find_orphans(config: Config) -> list[Path]:
    """Compiled outputs whose source no longer exists.

    Only outputs recorded in the manifest are considered, so hand-written
    files next to compiled ones are never reported. Skill orphans are
    reported as their output directory.
    """
    return [path for _, path in _orphan_entries(config)]


def clean_outputs(config: Config, dry_run: bool = False) -> list[Path]:
    """Remove orphaned outputs and return what was (or would be) removed.

    A skill output directory is removed entirely only when the compiled skill
    file is its sole content; otherwise just that file is deleted.
    """
    _check_layout(config)
    orphans = _orphan_entries(config)
    if dry_run:
        return [path for _, path in orphans]

    entries = load_manifest(config)
    for key, path in orphans:
        try:
            if path.is_dir():
                compiled = path / config.settings.skill_output
                if [p.name for p in path.iterdir()] == [compiled.name]:
                    shutil.rmtree(path)
                else:
                    compiled.unlink()
            else:
                path.unlink()
        except OSError as e:
            raise CompileError(f"Error removing {path}: {e}", path=path) from e
        entries.pop(key, None)

    # Entries whose output was deleted by hand
    for key in [k for k in entries if not (config.output_root / k).is_file()]:
        entries.pop(key)

    save_manifest(config, entries)
    return [path for _, path in orphans]


def list_agents(config: Config) -> list[AgentInfo]:
    """Metadata for every compiled agent, sorted by file name."""
    directory = config.agents_output_dir
    if not directory.is_dir():
        return []

    out_suffix = config.settings.output_suffix
    agents: list[AgentInfo] = []
    for path in sorted(directory.iterdir()):
        if path.is_file() and path.name.endswith(out_suffix):
            try:
                agents.append(load_agent_info(path))
            except (OSError, UnicodeDecodeError) as e:
                raise CompileError(f"Error reading {path}: {e}", path=path) from e
    return agents


def list_skills(config: Config) -> list[Path]:
    """Compiled skill files, sorted by skill name."""
    directory = config.skills_output_dir
    if not directory.is_dir():
        return []

    return sorted(
        p / config.settings.skill_output
        for p in directory.iterdir()
        if p.is_dir() and (p / config.settings.skill_output).is_file()
    )
