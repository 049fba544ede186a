"""Read agent metadata from YAML front matter.

Compiled agent files start with a block like:

---
name: mobx
description: MobX state management specialist
tools: Read, Grep, Glob
model: sonnet
---

followed by the markdown instructions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Tuple

import yaml


@dataclass(frozen=True)
class AgentInfo:
    """Metadata for one compiled agent"""

    name: str
    path: Path
    description: str = ""
    model: Optional[str] = None
    tools: list[str] = field(default_factory=list)


def parse_front_matter(text: str) -> Tuple[dict[str, Any], str]:
    """Parse YAML front matter.

    Returns:
        (front_matter_dict, body_text)
    """

    raw = (text or "").lstrip("\ufeff")
    lines = raw.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, text

    # Find closing ---
    end_idx: Optional[int] = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end_idx = i
            break

    if end_idx is None:
        return {}, text

    fm_text = "\n".join(lines[1:end_idx]).strip()
    body = "\n".join(lines[end_idx + 1 :])

    if not fm_text:
        return {}, body

    try:
        data = yaml.safe_load(fm_text) or {}
    except yaml.YAMLError:
        return {}, body

    if not isinstance(data, dict):
        return {}, body

    return data, body


def _split_tools(value: Any) -> list[str]:
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    if isinstance(value, list):
        return [str(t).strip() for t in value if str(t).strip()]
    return []


def load_agent_info(path: Path) -> AgentInfo:
    """Build AgentInfo from a compiled agent file.

    Raises:
        OSError: If the file cannot be read
    """
    fm, _ = parse_front_matter(path.read_text(encoding="utf-8"))

    name = fm.get("name")
    if not isinstance(name, str) or not name.strip():
        name = path.stem

    description = fm.get("description")
    model = fm.get("model")

    return AgentInfo(
        name=name.strip(),
        path=path,
        description=str(description).strip() if description is not None else "",
        model=str(model).strip() if model is not None else None,
        tools=_split_tools(fm.get("tools")),
    )
