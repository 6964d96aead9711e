# src/spark_todo/store/models.py

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .errors import ValidationError

Clock = Callable[[], int]

MAX_GROUP_NAME_LEN = 50
MAX_TASK_TITLE_LEN = 200
MAX_TASK_CONTENT_LEN = 1000
MAX_VIEW_MODE_LEN = 20


def now_ms() -> int:
    """Current time as a millisecond epoch timestamp."""
    return int(time.time() * 1000)


class TaskStatus(StrEnum):
    """
    Task status.

    There is no transition graph: any status can be set from any other.
    Un-marking a done task goes back to TODO, not to whatever it was before.
    """

    TODO = "todo"
    DOING = "doing"
    DONE = "done"

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus:
        try:
            return cls(str(raw))
        except ValueError:
            raise ValidationError("invalid_status", f"invalid task status: {raw!r}") from None


class Quadrant(StrEnum):
    """Eisenhower quadrant derived from the important/urgent flags (never stored)."""

    IMPORTANT_URGENT = "important_urgent"
    IMPORTANT_NOT_URGENT = "important_not_urgent"
    URGENT_NOT_IMPORTANT = "urgent_not_important"
    NEITHER = "neither"

    @classmethod
    def classify(cls, *, important: bool, urgent: bool) -> Quadrant:
        if important:
            return cls.IMPORTANT_URGENT if urgent else cls.IMPORTANT_NOT_URGENT
        return cls.URGENT_NOT_IMPORTANT if urgent else cls.NEITHER


class ViewMode(StrEnum):
    LIST = "list"
    CARDS = "cards"

    @classmethod
    def normalize(cls, raw: str | None) -> str:
        v = (raw or "").strip().lower()
        if len(v) > MAX_VIEW_MODE_LEN:
            return cls.CARDS.value
        if v in (cls.LIST.value, cls.CARDS.value):
            return v
        return cls.CARDS.value


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def normalize(cls, raw: str | None) -> str:
        v = (raw or "").strip().lower()
        return cls.DARK.value if v == cls.DARK.value else cls.LIGHT.value


@dataclass(frozen=True, slots=True)
class Group:
    id: int
    name: str
    created_at: int = 0
    updated_at: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    group_id: int
    title: str
    content: str = ""
    status: TaskStatus = TaskStatus.TODO
    important: bool = False
    urgent: bool = False
    created_at: int = 0
    updated_at: int = 0

    @property
    def quadrant(self) -> Quadrant:
        return Quadrant.classify(important=self.important, urgent=self.urgent)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "groupId": self.group_id,
            "title": self.title,
            "content": self.content,
            "status": str(self.status),
            "important": self.important,
            "urgent": self.urgent,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True, slots=True)
class Settings:
    """
    User preferences.

    `theme` has no store-level default: it stays "" until the user picks one.
    """

    hide_done: bool = False
    always_on_top: bool = True
    view_mode: str = ViewMode.CARDS.value
    concise_mode: bool = False
    theme: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "hideDone": self.hide_done,
            "alwaysOnTop": self.always_on_top,
            "viewMode": self.view_mode,
            "conciseMode": self.concise_mode,
            "theme": self.theme,
        }


@dataclass(slots=True)
class Board:
    """Everything a front end needs to render, in one read."""

    groups: list[Group] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)
    statuses: list[TaskStatus] = field(default_factory=lambda: list(TaskStatus))

    def to_dict(self) -> dict[str, Any]:
        return {
            "groups": [g.to_dict() for g in self.groups],
            "tasks": [t.to_dict() for t in self.tasks],
            "settings": self.settings.to_dict(),
            "statuses": [str(s) for s in self.statuses],
        }
