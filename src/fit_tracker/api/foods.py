"""Food search and serving endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from fastapi import (
    APIRouter,
    Depends,
    Query,
    Request,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from fit_tracker.api.auth import require_api_token, token_matches
from fit_tracker.api.schemas import IngredientPayload, LookupMessage
from fit_tracker.services.food_lookup import LookupDebouncer
from fit_tracker.services.servings import scale_serving

if TYPE_CHECKING:
    from fit_tracker.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("/search", dependencies=[Depends(require_api_token)])
async def search_foods(
    request: Request, q: str = Query(min_length=1)
) -> dict[str, object]:
    """Resolve a food name against the local table, then Open Food Facts."""
    container: AppContainer = request.app.state.container
    return {"result": await container.food_lookup_service.resolve(q)}


@router.post("/scale", dependencies=[Depends(require_api_token)])
async def scale_food(payload: IngredientPayload) -> dict[str, object]:
    """Return nutrient totals for a quantity of a food."""
    ingredient = payload.to_domain()
    return {"totals": scale_serving(ingredient.food, ingredient.quantity)}


@router.websocket("/search/ws")
async def search_as_you_type(websocket: WebSocket) -> None:
    """Debounced suggestions while the user types; stale lookups are dropped."""
    container: AppContainer = websocket.app.state.container
    candidate = websocket.headers.get("x-api-token") or websocket.query_params.get(
        "token"
    )
    if not token_matches(candidate, container.settings.api_token):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    await websocket.accept()
    debouncer = LookupDebouncer(
        lookup=container.food_lookup_service,
        quiet_period_seconds=container.settings.lookup_debounce_seconds,
    )
    pending: set[asyncio.Task] = set()

    async def answer(message: LookupMessage) -> None:
        result = await debouncer.submit(message.field_id, message.term)
        if result is None:
            return
        await websocket.send_json(
            {"field_id": message.field_id, "result": jsonable_encoder(result)}
        )

    try:
        while True:
            try:
                message = LookupMessage.model_validate(await websocket.receive_json())
            except (ValidationError, ValueError):
                await websocket.send_json({"error": "invalid lookup message"})
                continue
            task = asyncio.create_task(answer(message))
            pending.add(task)
            task.add_done_callback(pending.discard)
    except WebSocketDisconnect:
        _logger.debug("Lookup websocket closed with %s pending", len(pending))
    finally:
        for task in list(pending):
            task.cancel()
