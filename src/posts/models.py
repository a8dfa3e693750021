"""Post data models produced by the loader."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostMetadata(BaseModel):
    """Front-matter of a single authored post."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    slug: str
    title: str
    summary: str = ""
    published_at: str = Field(alias="publishedAt")
    tags: list[str] = Field(default_factory=list)
    draft: bool = False

    @field_validator("published_at", mode="before")
    @classmethod
    def _coerce_published_at(cls, value: object) -> object:
        # YAML turns unquoted ISO dates into date/datetime objects
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return value

    @field_validator("summary", mode="before")
    @classmethod
    def _none_summary(cls, value: object) -> object:
        return "" if value is None else value


class CompiledBody(BaseModel):
    """A post body compiled to an HTML fragment, ready for rendering."""

    model_config = ConfigDict(frozen=True)

    source: str = ""
    html: str


class Post(BaseModel):
    """An authored post: metadata plus compiled body."""

    model_config = ConfigDict(frozen=True)

    metadata: PostMetadata
    body: CompiledBody
    source_path: Path | None = None

    @property
    def slug(self) -> str:
        return self.metadata.slug
