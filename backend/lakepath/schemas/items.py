"""Listing item and response envelope schemas."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


def format_timestamp(value: datetime) -> str:
    """UTC, millisecond precision, ``Z`` suffix: ``yyyy-MM-ddTHH:mm:ss.fffZ``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PathItem(CamelModel):
    """One listed file or directory."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    directory: str
    url: str
    is_directory: bool = False
    content_length: int = 0
    last_modified: datetime | None = None

    @property
    def path(self) -> str:
        return f"{self.directory}/{self.name}" if self.directory else self.name

    @field_serializer("last_modified")
    def _serialize_last_modified(self, value: datetime | None) -> str | None:
        return format_timestamp(value) if value is not None else None


class InvalidFilter(CamelModel):
    field: str
    operator: str | None = None
    value: str
    error: str


class ItemsResponse(CamelModel):
    """getItems envelope; files are only present when every filter is valid."""
    corrected_file_path: str | None = None
    file_count: int | None = None
    files: list[PathItem] | None = None
    invalid_filters: list[InvalidFilter] | None = None


class CheckPathResponse(CamelModel):
    validated_path: str
