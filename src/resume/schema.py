"""ResumeData model: structured parser output consumed by the scorer."""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field


class SkillCategory(BaseModel):
    """A named group of skills (e.g. "Languages")."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    skills: list[str] = Field(default_factory=list, alias="list")


class EducationEntry(BaseModel):
    degree: str = ""
    school: str = ""
    year: str = ""


class WorkExperienceEntry(BaseModel):
    role: str = ""
    company: str = ""
    bullets: list[str] = Field(default_factory=list)


class ProjectEntry(BaseModel):
    title: str = ""
    bullets: list[str] = Field(default_factory=list)


class ResumeData(BaseModel):
    """Structured resume produced by an upstream parser.

    Accepts the parser's camelCase ``workExperience`` key as well as the
    snake_case field name.
    """

    model_config = ConfigDict(populate_by_name=True)

    skills: list[SkillCategory] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    work_experience: list[WorkExperienceEntry] = Field(
        default_factory=list, alias="workExperience",
    )
    projects: list[ProjectEntry] = Field(default_factory=list)

    @classmethod
    def from_file(cls, path: str | Path) -> "ResumeData":
        """Load structured resume data from a YAML or JSON file."""
        path = Path(path)
        if not path.exists():
            msg = f"Resume data file not found: {path}"
            raise FileNotFoundError(msg)
        text = path.read_text()
        if path.suffix.lower() == ".json":
            try:
                raw: dict[str, Any] = json.loads(text) or {}
            except json.JSONDecodeError as e:
                msg = f"Failed to parse resume data as JSON: {e}"
                raise ValueError(msg) from e
        else:
            try:
                raw = yaml.safe_load(text) or {}
            except yaml.YAMLError as e:
                msg = f"Failed to parse resume data as YAML: {e}"
                raise ValueError(msg) from e
        return cls.model_validate(raw)
