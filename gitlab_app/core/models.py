"""Domain data models for GitLab issues and their nested references."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class AuthorModel:
    id: int | None
    name: str | None


@dataclass(frozen=True, slots=True)
class ProjectModel:
    id: int | None
    name: str | None


@dataclass(frozen=True, slots=True)
class IssueModel:
    id: int
    iid: int
    title: str | None
    description: str | None
    state: str
    severity: str | None
    created_at: datetime | None
    closed_at: datetime | None
    author: AuthorModel
    project: ProjectModel
    web_url: str | None
    updated_at: datetime | None = None
    milestone: str | None = None
    labels: tuple[str, ...] = field(default_factory=tuple)
    assignees: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_open(self) -> bool:
        return self.state == "opened"
