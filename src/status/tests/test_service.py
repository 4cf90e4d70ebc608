"""Tests for status/service.py."""

from urllib.parse import parse_qsl

import pytest
from django.http import QueryDict
from pydantic import ValidationError

from status.schema import EventRecord, EventsPage, GridRequest
from status.service import build_query, group_events, page_number, parse_grid_request, to_grid_response


def _form(**values: str) -> QueryDict:
    form = QueryDict(mutable=True)
    for key, value in values.items():
        form[key] = value
    return form


class TestParseGridRequest:
    """Tests for reading DataTables parameters from a form."""

    def test_defaults_for_empty_form(self) -> None:
        """An empty form falls back to the first page sorted by title."""
        grid_request = parse_grid_request(QueryDict())

        assert grid_request.draw == "0"
        assert grid_request.start == 0
        assert grid_request.length == 10
        assert grid_request.search is None
        assert grid_request.start_date is None
        assert grid_request.end_date is None
        assert grid_request.sort_column_index == 0
        assert grid_request.sort_column == "ParentEvent.Title"
        assert grid_request.sort_direction == "asc"

    def test_reads_all_fields(self) -> None:
        """Every DataTables field is mapped, and the sort column is looked up by index."""
        form = _form(
            **{
                "draw": "7",
                "start": "20",
                "length": "25",
                "search[value]": "outage",
                "startDate": "2024-01-01",
                "endDate": "2024-01-31",
                "order[0][column]": "2",
                "order[0][dir]": "desc",
                "columns[0][data]": "ParentEvent.Title",
                "columns[2][data]": "ParentEvent.CreatedDate",
            }
        )

        grid_request = parse_grid_request(form)

        assert grid_request.draw == "7"
        assert grid_request.start == 20
        assert grid_request.length == 25
        assert grid_request.search == "outage"
        assert grid_request.start_date == "2024-01-01"
        assert grid_request.end_date == "2024-01-31"
        assert grid_request.sort_column_index == 2
        assert grid_request.sort_column == "ParentEvent.CreatedDate"
        assert grid_request.sort_direction == "desc"

    def test_missing_column_name_uses_default(self) -> None:
        """A sort index without a matching column name sorts by title."""
        grid_request = parse_grid_request(_form(**{"order[0][column]": "4"}))

        assert grid_request.sort_column == "ParentEvent.Title"

    def test_all_rows_length_is_accepted(self) -> None:
        """DataTables posts length=-1 when the user picks all rows."""
        grid_request = parse_grid_request(_form(length="-1"))

        assert grid_request.length == -1
        assert build_query(grid_request).startswith("pageSize=-1&pageNumber=1&")

    def test_blank_fields_count_as_missing(self) -> None:
        """Blank values are treated like absent ones."""
        grid_request = parse_grid_request(_form(start="", length="", **{"search[value]": ""}))

        assert grid_request.start == 0
        assert grid_request.length == 10
        assert grid_request.search is None

    @pytest.mark.parametrize(
        "field,value",
        [
            ("start", "abc"),
            ("length", "ten"),
            ("order[0][column]", "first"),
            ("length", "0"),
        ],
    )
    def test_malformed_numbers_raise(self, field: str, value: str) -> None:
        """Malformed or out-of-range numeric input is rejected."""
        with pytest.raises(ValidationError):
            parse_grid_request(_form(**{field: value}))


class TestPageNumber:
    def test_offset_converts_to_one_based_page(self) -> None:
        assert page_number(20, 10) == 3

    def test_first_page(self) -> None:
        assert page_number(0, 10) == 1

    def test_offset_inside_a_page_rounds_down(self) -> None:
        assert page_number(15, 10) == 2

    def test_all_rows_page_size(self) -> None:
        """A page size of -1 (all rows) starts on page 1."""
        assert page_number(0, -1) == 1

    def test_negative_values_truncate_toward_zero(self) -> None:
        assert page_number(5, -10) == 1
        assert page_number(-15, 10) == 0
        assert page_number(20, -1) == -19


class TestBuildQuery:
    """Tests for the outbound /api/getevents query string."""

    def test_required_parameters_only(self) -> None:
        """Empty search and date filters are left out entirely."""
        query = build_query(GridRequest(start=20, length=10))

        assert query == "pageSize=10&pageNumber=3&sortColumn=ParentEvent.Title&sortDirection=asc"
        assert "searchTerm" not in query
        assert "startDate" not in query
        assert "endDate" not in query

    def test_includes_filters_when_set(self) -> None:
        """Search and date filters are appended after the paging parameters."""
        grid_request = GridRequest(search="disk", start_date="2024-01-01", end_date="2024-02-01")

        query = build_query(grid_request)

        assert [key for key, _ in parse_qsl(query)] == [
            "pageSize",
            "pageNumber",
            "sortColumn",
            "sortDirection",
            "searchTerm",
            "startDate",
            "endDate",
        ]
        assert query.endswith("&searchTerm=disk&startDate=2024-01-01&endDate=2024-02-01")

    def test_values_are_percent_encoded(self) -> None:
        """Reserved characters and spaces are escaped."""
        grid_request = GridRequest(search="a&b c/d", sort_column="Parent Event", sort_direction="desc")

        query = build_query(grid_request)

        assert "searchTerm=a%26b%20c%2Fd" in query
        assert "sortColumn=Parent%20Event" in query
        assert dict(parse_qsl(query))["searchTerm"] == "a&b c/d"

    def test_empty_search_is_omitted(self) -> None:
        query = build_query(GridRequest(search="", start_date="", end_date=""))

        assert query == "pageSize=10&pageNumber=1&sortColumn=ParentEvent.Title&sortDirection=asc"


class TestGroupEvents:
    """Tests for grouping flat rows into parent and related events."""

    def test_first_seen_record_is_parent(self) -> None:
        """The first row per identifier is the parent; the rest are related, in order."""
        records = [
            EventRecord(Identifier="a", ParentEvent={"Title": "A1"}),
            EventRecord(Identifier="b", ParentEvent={"Title": "B1"}),
            EventRecord(Identifier="a", ParentEvent={"Title": "A2"}),
            EventRecord(Identifier="a", ParentEvent={"Title": "A3"}),
        ]

        groups = group_events(records)

        assert [group.Identifier for group in groups] == ["a", "b"]
        assert groups[0].ParentEvent == {"Title": "A1"}
        assert [related.ParentEvent for related in groups[0].RelatedEvents] == [{"Title": "A2"}, {"Title": "A3"}]
        assert all(related.Identifier == "a" for related in groups[0].RelatedEvents)
        assert groups[1].ParentEvent == {"Title": "B1"}
        assert groups[1].RelatedEvents == []

    def test_nested_parent_event_passes_through(self) -> None:
        """Parent events are opaque and kept as-is."""
        parent = {"Title": "Deploy", "Meta": {"Tags": ["a", "b"], "Count": 2}}

        groups = group_events([EventRecord(Identifier=1, ParentEvent=parent)])

        assert groups[0].ParentEvent == parent

    def test_empty_input(self) -> None:
        assert group_events([]) == []


class TestToGridResponse:
    def test_envelope(self) -> None:
        """Total records fill both counts and the draw token is echoed."""
        page = EventsPage(Data=[EventRecord(Identifier="x", ParentEvent={"Title": "X"})], TotalRecords=42)

        response = to_grid_response("3", page)

        assert response.draw == "3"
        assert response.recordsTotal == 42
        assert response.recordsFiltered == 42
        assert len(response.data) == 1

    def test_missing_draw_defaults_to_zero(self) -> None:
        assert to_grid_response(None, EventsPage()).draw == "0"


class TestEventsPage:
    """Tests for parsing the events API payload."""

    def test_parses_pascal_case(self) -> None:
        page = EventsPage.model_validate(
            {"Data": [{"Identifier": "a", "ParentEvent": {"Title": "A"}}], "TotalRecords": 1}
        )

        assert page.TotalRecords == 1
        assert page.Data[0].Identifier == "a"
        assert page.Data[0].ParentEvent == {"Title": "A"}

    def test_parses_camel_case(self) -> None:
        page = EventsPage.model_validate(
            {"data": [{"identifier": "a", "parentEvent": {"title": "A"}}], "totalRecords": 5}
        )

        assert page.TotalRecords == 5
        assert page.Data[0].Identifier == "a"
        assert page.Data[0].ParentEvent == {"title": "A"}

    def test_null_fields(self) -> None:
        page = EventsPage.model_validate({"Data": None, "TotalRecords": None})

        assert page.Data == []
        assert page.TotalRecords == 0
