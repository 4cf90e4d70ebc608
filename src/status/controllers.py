"""Status grid endpoints.

Both endpoints take form-encoded posts from the status page. Errors are turned
into payloads the page can show instead of surfacing as API errors.
"""

import re
from uuid import UUID

import structlog
from ninja import Form
from ninja_extra import ControllerBase, api_controller, route

from status.client import EventsApiError, get_events_api_client
from status.schema import DeleteEventResponse, ErrorResponse, GridResponse
from status.service import build_query, parse_grid_request, to_grid_response

logger = structlog.get_logger(__name__)

INVALID_EVENT_ID_MESSAGE = "Invalid EventId."

_GUID = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
# 32 digits, hyphenated, or hyphenated inside braces or parentheses.
EVENT_ID_PATTERN = re.compile(rf"[0-9a-f]{{32}}|{_GUID}|\{{{_GUID}\}}|\({_GUID}\)", re.IGNORECASE)


@api_controller("/status", tags=["Status"])
class StatusController(ControllerBase):
    @route.post("/data", url_name="status_grid_data", response={200: GridResponse, 500: ErrorResponse})
    def get_data(self) -> tuple[int, GridResponse | ErrorResponse]:
        """Return one page of grouped events for the status grid.

        Reads the DataTables server-side parameters (``draw``, ``start``, ``length``,
        ``search[value]``, ``order[0][column]``, ``order[0][dir]``, ``columns[N][data]``)
        plus the optional ``startDate``/``endDate`` filters, queries the events API and
        groups the rows by identifier. Any failure is reported as a 500 with an ``error`` message.
        """
        form = self.context.request.POST  # type: ignore[union-attr]
        try:
            grid_request = parse_grid_request(form)
            page = get_events_api_client().get_events(build_query(grid_request))
            return 200, to_grid_response(grid_request.draw, page)
        except Exception as e:
            logger.exception("grid_data_failed", draw=form.get("draw"), error=str(e))
            return 500, ErrorResponse(error=str(e))

    @route.post("/delete", url_name="status_delete_event", response=DeleteEventResponse, exclude_none=True)
    def delete_event(self, eventId: Form[str] = "") -> DeleteEventResponse:
        """Delete an event through the events API.

        ``eventId`` must be a GUID in one of the ``N``, ``D``, ``B`` or ``P`` forms; anything
        else is rejected without calling the API. A failure status from the API is reported
        with its response body as the message.
        """
        event_id = _parse_event_id(eventId)
        if event_id is None:
            logger.warning("delete_event_rejected", event_id=eventId)
            return DeleteEventResponse(success=False, message=INVALID_EVENT_ID_MESSAGE)

        try:
            response = get_events_api_client().delete_event(event_id)
        except EventsApiError as e:
            return DeleteEventResponse(success=False, message=str(e))

        if not response.is_success:
            logger.warning("delete_event_failed", event_id=str(event_id), status_code=response.status_code)
            return DeleteEventResponse(success=False, message=response.text)

        logger.info("event_deleted", event_id=str(event_id))
        return DeleteEventResponse(success=True)


def _parse_event_id(value: str) -> UUID | None:
    """Parse an event id, returning None unless it is a GUID in one of the accepted forms."""
    value = value.strip()
    if not EVENT_ID_PATTERN.fullmatch(value):
        return None
    return UUID(value)
