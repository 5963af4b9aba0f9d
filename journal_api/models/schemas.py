from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class _WireModel(BaseModel):
    # snake_case attributes, camelCase JSON
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Event(_WireModel):
    id: str
    title: str
    content: str = ""
    mood: str = ""
    tags: list[str] = Field(default_factory=list)
    media_refs: list[str] = Field(default_factory=list)
    occurred_at: datetime


class CreateEventInput(_WireModel):
    # wire names only: snake_case keys are unknown fields
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=False, extra="forbid")

    title: str = Field(min_length=1)
    content: str = ""
    mood: str = ""
    tags: list[str] = Field(default_factory=list)
    media_refs: list[str] = Field(default_factory=list)


class Metric(_WireModel):
    id: str
    sheet: str
    name: str
    date: datetime
    open: float
    high: float
    low: float
    close: float
    events: list[str] = Field(default_factory=list)


class ListMeta(BaseModel):
    count: int


class ListEnvelope(BaseModel, Generic[T]):
    data: list[T]
    meta: ListMeta


class ItemEnvelope(BaseModel, Generic[T]):
    data: T


class HealthResponse(BaseModel):
    status: str = "ok"
