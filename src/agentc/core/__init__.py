"""Core compilation logic"""

from .compiler import (
    BuildReport,
    CompileResult,
    check_outputs,
    clean_outputs,
    compile_agent,
    compile_all_agents,
    compile_all_skills,
    compile_everything,
    compile_skill,
    discover_agent_sources,
    discover_skills,
    find_orphans,
    list_agents,
    list_skills,
    load_manifest,
    manifest_path,
    output_name,
)
from .errors import AgentcError, CompileError, ConfigError
from .frontmatter import AgentInfo, load_agent_info, parse_front_matter
from .includes import Diagnostic, IncludeDirective, ResolveResult, find_directives, resolve_includes

__all__ = [
    "AgentInfo",
    "AgentcError",
    "BuildReport",
    "CompileError",
    "CompileResult",
    "ConfigError",
    "Diagnostic",
    "IncludeDirective",
    "ResolveResult",
    "check_outputs",
    "clean_outputs",
    "compile_agent",
    "compile_all_agents",
    "compile_all_skills",
    "compile_everything",
    "compile_skill",
    "discover_agent_sources",
    "discover_skills",
    "find_directives",
    "find_orphans",
    "list_agents",
    "list_skills",
    "load_manifest",
    "manifest_path",
    "load_agent_info",
    "output_name",
    "parse_front_matter",
    "resolve_includes",
]
