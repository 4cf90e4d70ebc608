"""Translation between the grid widget protocol and the events API."""

import typing as t
from urllib.parse import quote

from status.schema import (
    DEFAULT_DRAW,
    DEFAULT_SORT_COLUMN,
    DEFAULT_SORT_DIRECTION,
    EventRecord,
    EventsPage,
    GridRequest,
    GridResponse,
    GroupedEvent,
    RelatedEvent,
)


def _field(form: t.Mapping[str, t.Any], key: str) -> str | None:
    """Return a form value, treating blank values as missing."""
    value = form.get(key)
    if value is None or value == "":
        return None
    return str(value)


def parse_grid_request(form: t.Mapping[str, t.Any]) -> GridRequest:
    """Read the DataTables server-side parameters from a posted form.

    Raises:
        pydantic.ValidationError: If a numeric field is malformed or out of range.
    """
    values = {
        "draw": _field(form, "draw"),
        "start": _field(form, "start"),
        "length": _field(form, "length"),
        "search": _field(form, "search[value]"),
        "start_date": _field(form, "startDate"),
        "end_date": _field(form, "endDate"),
        "sort_column_index": _field(form, "order[0][column]"),
        "sort_direction": _field(form, "order[0][dir]"),
    }
    grid_request = GridRequest.model_validate({k: v for k, v in values.items() if v is not None})

    # The sort column name is only known once the index has been parsed.
    sort_column = _field(form, f"columns[{grid_request.sort_column_index}][data]") or DEFAULT_SORT_COLUMN
    return grid_request.model_copy(update={"sort_column": sort_column})


def page_number(start: int, length: int) -> int:
    """Convert a row offset and page size into a 1-based page number.

    The division truncates toward zero, so the "all rows" page size of -1 maps
    offset 0 to page 1.
    """
    pages = abs(start) // abs(length)
    if (start < 0) != (length < 0):
        pages = -pages
    return pages + 1


def build_query(grid_request: GridRequest) -> str:
    """Build the percent-encoded query string for ``/api/getevents``.

    Search and date filters are only included when they are set.
    """
    params: list[tuple[str, str | int]] = [
        ("pageSize", grid_request.length),
        ("pageNumber", page_number(grid_request.start, grid_request.length)),
        ("sortColumn", grid_request.sort_column or DEFAULT_SORT_COLUMN),
        ("sortDirection", grid_request.sort_direction or DEFAULT_SORT_DIRECTION),
    ]
    if grid_request.search:
        params.append(("searchTerm", grid_request.search))
    if grid_request.start_date:
        params.append(("startDate", grid_request.start_date))
    if grid_request.end_date:
        params.append(("endDate", grid_request.end_date))

    return "&".join(f"{key}={quote(str(value), safe='')}" for key, value in params)


def group_events(records: t.Iterable[EventRecord]) -> list[GroupedEvent]:
    """Group flat event rows by identifier.

    Groups keep the order in which their identifier first appears. The first
    row of a group is its parent; the rest follow as related events.
    """
    groups: dict[t.Any, list[EventRecord]] = {}
    for record in records:
        groups.setdefault(record.Identifier, []).append(record)

    return [
        GroupedEvent(
            Identifier=identifier,
            ParentEvent=members[0].ParentEvent,
            RelatedEvents=[
                RelatedEvent(Identifier=member.Identifier, ParentEvent=member.ParentEvent) for member in members[1:]
            ],
        )
        for identifier, members in groups.items()
    ]


def to_grid_response(draw: str | None, page: EventsPage) -> GridResponse:
    """Wrap a page of events in the envelope the grid widget expects."""
    return GridResponse(
        draw=draw or DEFAULT_DRAW,
        recordsFiltered=page.TotalRecords,
        recordsTotal=page.TotalRecords,
        data=group_events(page.Data),
    )
