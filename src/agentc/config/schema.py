"""Configuration schema using Pydantic"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    """Where sources live, where outputs go, and how files are named"""

    source_dir: str = Field(
        default=".claude-src",
        description="Root of the source tree (relative to the project root)",
    )
    output_dir: str = Field(
        default=".claude",
        description="Root of the compiled tree (relative to the project root)",
    )
    agents_dir: str = Field(
        default="agents",
        description="Agents sub-directory, used under both source and output roots",
    )
    skills_dir: str = Field(
        default="skills",
        description="Skills sub-directory, used under both source and output roots",
    )
    source_suffix: str = Field(
        default=".src.md",
        description="Suffix identifying agent source files",
    )
    output_suffix: str = Field(
        default=".md",
        description="Suffix that replaces source_suffix in compiled agent names",
    )
    skill_source: str = Field(
        default="src.md",
        description="Source file name inside each skill directory",
    )
    skill_output: str = Field(
        default="SKILL.md",
        description="Compiled file name inside each skill output directory",
    )
    strict: bool = Field(
        default=False,
        description="Treat failed includes as build failures",
    )

    @field_validator("source_suffix", "skill_source", "skill_output")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class Config(BaseModel):
    """Main application configuration"""

    settings: Settings = Field(
        default_factory=Settings,
        description="Build settings",
    )
    project_root: Path = Field(
        default_factory=Path.cwd,
        description="Directory relative paths resolve against",
    )

    model_config = {"extra": "ignore"}

    def _under_root(self, value: str) -> Path:
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self.project_root / path
        return path

    @property
    def source_root(self) -> Path:
        return self._under_root(self.settings.source_dir)

    @property
    def output_root(self) -> Path:
        return self._under_root(self.settings.output_dir)

    @property
    def agents_source_dir(self) -> Path:
        return self.source_root / self.settings.agents_dir

    @property
    def skills_source_dir(self) -> Path:
        return self.source_root / self.settings.skills_dir

    @property
    def agents_output_dir(self) -> Path:
        return self.output_root / self.settings.agents_dir

    @property
    def skills_output_dir(self) -> Path:
        return self.output_root / self.settings.skills_dir
