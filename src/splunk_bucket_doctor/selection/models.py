"""Index selection configuration models."""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Any

from pydantic import BaseModel, Field, field_validator


def _ensure_list(v: Any) -> list:
    """Convert None to empty list, wrap a lone string."""
    if v is None:
        return []
    if isinstance(v, str):
        return [v]
    return v


class IndexSelection(BaseModel):
    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    skip_deleted: bool = Field(default=True)
    skip_disabled: bool = Field(default=False)

    @field_validator("include", "exclude", mode="before")
    @classmethod
    def _validate_lists(cls, v: Any) -> list:
        return _ensure_list(v)

    def matches(self, name: str) -> bool:
        if self.include and not any(fnmatchcase(name, pattern) for pattern in self.include):
            return False
        return not any(fnmatchcase(name, pattern) for pattern in self.exclude)

    @classmethod
    def from_yaml(cls, data: dict[str, object]) -> "IndexSelection":
        return cls.model_validate(data)
