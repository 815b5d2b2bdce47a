# app/dashboard/board.py
"""
Client-side state for the ticket list and dashboard.

``TicketBoard`` keeps the one list of tickets the UI renders from.  The
list is never patched locally: every successful mutation bumps
``refresh_counter`` and the whole list is fetched again from the API.
Each fetch remembers the counter value it was issued at, and a response
older than the last one applied is dropped, so overlapping refreshes
cannot roll the list back.
"""
import logging

import httpx
from pydantic_core import to_jsonable_python

from app.dashboard.aggregation import build_dashboard
from app.dashboard.schemas import DashboardSnapshot
from app.ticket.schemas import TicketOut

logger = logging.getLogger(__name__)

CONNECTION_ERROR = "Error de conexión"
LOAD_ERROR = "Error al cargar los datos"


class BoardError(Exception):
    """A mutation failed; ``message`` is what the user should see."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class TicketBoard:
    def __init__(self, client: httpx.Client):
        self.client = client
        self.tickets: list[TicketOut] = []
        self.error = ""
        self.loading = False
        self.refresh_counter = 0
        self._applied = -1

    def bump(self) -> int:
        self.refresh_counter += 1
        return self.refresh_counter

    def refresh(self) -> bool:
        """Fetch the full list. Returns False when the fetch failed or was stale."""
        issued = self.refresh_counter
        self.loading = True
        try:
            response = self.client.get("/tickets")
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Ticket list fetch failed: %s", exc)
            return self._apply(issued, error=CONNECTION_ERROR)
        finally:
            self.loading = False

        if not response.is_success:
            return self._apply(issued, error=payload.get("error") or LOAD_ERROR)
        tickets = [TicketOut.model_validate(t) for t in payload.get("data") or []]
        return self._apply(issued, tickets=tickets)

    def _apply(self, issued: int, tickets: list[TicketOut] | None = None, error: str = "") -> bool:
        if issued < self._applied:
            logger.debug("Dropping stale ticket list for refresh %s", issued)
            return False
        self._applied = issued
        if error:
            self.error = error
            return False
        self.tickets = tickets or []
        self.error = ""
        return True

    def dashboard(self) -> DashboardSnapshot | None:
        if self.error:
            return None
        return build_dashboard(self.tickets)

    def equipment(self) -> list[str]:
        try:
            response = self.client.get("/equipment")
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error fetching equipment list: %s", exc)
            return []
        if not response.is_success:
            logger.error("Error fetching equipment list: %s", payload.get("error"))
            return []
        return list(payload.get("data") or [])

    def create_ticket(self, fields: dict) -> TicketOut:
        data = self._mutate("POST", "/tickets", fields, "Error al procesar el ticket")
        return TicketOut.model_validate(data)

    def update_ticket(self, ticket_id, fields: dict) -> TicketOut:
        data = self._mutate("PUT", f"/tickets/{ticket_id}", fields, "Error al procesar el ticket")
        return TicketOut.model_validate(data)

    def delete_ticket(self, ticket_id) -> str:
        return self._mutate("DELETE", f"/tickets/{ticket_id}", None, "Error al eliminar el ticket")

    def _mutate(self, method: str, url: str, fields: dict | None, fallback: str):
        body = to_jsonable_python(fields) if fields is not None else None
        try:
            response = self.client.request(method, url, json=body)
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise BoardError(CONNECTION_ERROR) from exc

        if not response.is_success:
            raise BoardError(payload.get("error") or fallback, response.status_code)

        self.bump()
        self.refresh()
        return payload["data"]
