"""
Live patient search over a WebSocket.

Client messages:
    {"type": "query", "text": "lab"}
    {"type": "filter", "name": "species", "value": "dog"}
    {"type": "clear_filters"}
    {"type": "refresh"}

Server messages:
    {"type": "results", "patients": [...]}
    {"type": "notification", "title": ..., "description": ..., "variant": ...}
"""

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ValidationError

from ..config import get_settings
from ..models.notification import Notification
from ..models.patient import Patient
from ..models.search import DEFAULT_FILTERS
from ..services.patient_service import PatientService
from ..services.search_controller import DebouncedSearchController

settings = get_settings()
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["Live Search"])

FILTERS_BY_NAME = {search_filter.name.value: search_filter for search_filter in DEFAULT_FILTERS}


class SearchMessage(BaseModel):
    """Event sent by the search bar."""
    type: Literal["query", "filter", "clear_filters", "refresh"]
    text: str = ""
    name: Optional[str] = None
    value: Optional[str] = None


@router.websocket("/search/live")
async def live_search(websocket: WebSocket):
    """Debounced search session; the full patient list is sent on connect."""
    await websocket.accept()

    async def send_results(patients: List[Patient]):
        await websocket.send_json({
            "type": "results",
            "patients": [patient.model_dump(mode="json") for patient in patients]
        })

    async def send_notification(notification: Notification):
        await websocket.send_json({"type": "notification", **notification.model_dump(mode="json")})

    controller = DebouncedSearchController(
        search=PatientService.search_patients,
        on_results=send_results,
        on_error=send_notification,
        quiet_period=settings.SEARCH_DEBOUNCE_MS / 1000
    )
    controller.refresh()

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = SearchMessage.model_validate_json(raw)
            except ValidationError as exc:
                logger.info("Ignoring malformed search message: %s", exc)
                await send_notification(Notification.error("Mensagem de busca inválida."))
                continue

            if message.type == "query":
                controller.keystroke(message.text)
            elif message.type == "filter":
                search_filter = FILTERS_BY_NAME.get(message.name or "")
                if search_filter is None or not search_filter.accepts(message.value or ""):
                    await send_notification(Notification.error("Filtro inválido."))
                    continue
                controller.change_filter(message.name, message.value)
            elif message.type == "clear_filters":
                controller.clear_filters()
            else:
                controller.refresh()
    except WebSocketDisconnect:
        logger.info("Live search client disconnected after %d searches", controller.issued)
    finally:
        controller.close()
