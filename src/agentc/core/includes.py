"""@include() directive resolution for markdown sources.

A directive looks like ``@include(../partials/core-principles.md)``. The path
is resolved relative to the directory of the file that contains the
directive, and the included text is itself resolved recursively.

Failures never raise: a directive that cannot be expanded stays in the text
and a diagnostic is recorded instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

INCLUDE_PATTERN = re.compile(r"@include\(([^)]+)\)")


@dataclass(frozen=True)
class IncludeDirective:
    """A single @include() occurrence"""

    raw: str
    target: str
    start: int
    end: int


@dataclass(frozen=True)
class Diagnostic:
    """Problem found while resolving includes"""

    level: str  # "warning" | "error"
    message: str
    source: Optional[Path] = None
    target: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.level == "error"


@dataclass
class ResolveResult:
    """Expanded content plus what happened along the way"""

    content: str
    included: list[Path] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)


def find_directives(text: str) -> list[IncludeDirective]:
    """Return every @include() directive in text, in order."""
    return [
        IncludeDirective(raw=m.group(0), target=m.group(1).strip(), start=m.start(), end=m.end())
        for m in INCLUDE_PATTERN.finditer(text or "")
    ]


def _resolve_target(target: str, base_path: Path) -> Path:
    path = Path(target).expanduser()
    if not path.is_absolute():
        path = base_path / path
    return path.resolve()


def resolve_includes(
    content: str,
    base_path: Path,
    stack: Optional[tuple[Path, ...]] = None,
    source: Optional[Path] = None,
) -> ResolveResult:
    """
    Recursively expand @include() directives.

    Args:
        content: Text to process
        base_path: Directory that relative include paths are resolved against
        stack: Files on the current include chain, outermost first. The file
            being compiled should be passed here so it cannot include itself.
        source: File the content came from, used in diagnostics

    Returns:
        ResolveResult with the expanded text
    """
    chain = stack or ()
    result = ResolveResult(content=content)
    directives = find_directives(content)
    if not directives:
        return result

    pieces: list[str] = []
    cursor = 0

    for directive in directives:
        pieces.append(content[cursor : directive.start])
        cursor = directive.end

        absolute = _resolve_target(directive.target, base_path)

        if absolute in chain:
            result.diagnostics.append(
                Diagnostic(
                    level="warning",
                    message=f"Circular include detected: {directive.target}",
                    source=source,
                    target=directive.target,
                )
            )
            pieces.append(directive.raw)
            continue

        try:
            included_text = absolute.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            result.diagnostics.append(
                Diagnostic(
                    level="error",
                    message=f"Error including {directive.target}: {reason}",
                    source=source,
                    target=directive.target,
                )
            )
            pieces.append(directive.raw)
            continue

        nested = resolve_includes(
            included_text,
            absolute.parent,
            stack=chain + (absolute,),
            source=absolute,
        )
        result.included.append(absolute)
        result.included.extend(nested.included)
        result.diagnostics.extend(nested.diagnostics)
        pieces.append(nested.content)

    pieces.append(content[cursor:])
    result.content = "".join(pieces)
    return result


def resolve_file(path: Path) -> ResolveResult:
    """Read a file and expand its includes, treating it as the chain root.

    Raises:
        OSError: If the file itself cannot be read
    """
    absolute = path.resolve()
    text = absolute.read_text(encoding="utf-8")
    return resolve_includes(text, absolute.parent, stack=(absolute,), source=absolute)
