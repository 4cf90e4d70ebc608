"""Schemas for the status grid and the events API payloads."""

import typing as t

from ninja import Schema
from pydantic import AliasChoices, BaseModel, Field, field_validator

DEFAULT_DRAW = "0"
DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT_COLUMN = "ParentEvent.Title"
DEFAULT_SORT_DIRECTION = "asc"


class GridRequest(Schema):
    """Paging, sorting and filtering parameters posted by the grid widget."""

    draw: str = DEFAULT_DRAW
    start: int = 0
    # DataTables sends -1 for "all rows"; only a zero page size is unusable.
    length: int = DEFAULT_PAGE_SIZE
    search: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    sort_column_index: int = Field(0, ge=0)
    sort_column: str = DEFAULT_SORT_COLUMN
    sort_direction: str = DEFAULT_SORT_DIRECTION

    @field_validator("length")
    @classmethod
    def _non_zero_length(cls, value: int) -> int:
        if value == 0:
            raise ValueError("length must not be zero")
        return value


# --- Events API payloads ---


class EventRecord(BaseModel):
    """One flat row of the events API. Both fields are passed through untouched."""

    Identifier: t.Any = Field(None, validation_alias=AliasChoices("Identifier", "identifier"))
    ParentEvent: t.Any = Field(None, validation_alias=AliasChoices("ParentEvent", "parentEvent"))


class EventsPage(BaseModel):
    """A page of events as returned by ``/api/getevents``."""

    Data: list[EventRecord] = Field(default_factory=list, validation_alias=AliasChoices("Data", "data"))
    TotalRecords: int = Field(0, validation_alias=AliasChoices("TotalRecords", "totalRecords"))

    @field_validator("Data", mode="before")
    @classmethod
    def _null_data(cls, value: t.Any) -> t.Any:
        return [] if value is None else value

    @field_validator("TotalRecords", mode="before")
    @classmethod
    def _null_total(cls, value: t.Any) -> t.Any:
        return 0 if value is None else value


# --- Grid responses ---


class RelatedEvent(Schema):
    Identifier: t.Any = None
    ParentEvent: t.Any = None


class GroupedEvent(Schema):
    Identifier: t.Any = None
    ParentEvent: t.Any = None
    RelatedEvents: list[RelatedEvent] = Field(default_factory=list)


class GridResponse(Schema):
    """Envelope understood by the DataTables server-side protocol."""

    draw: str
    recordsFiltered: int
    recordsTotal: int
    data: list[GroupedEvent]


class ErrorResponse(Schema):
    error: str


class DeleteEventResponse(Schema):
    success: bool
    message: str | None = None
