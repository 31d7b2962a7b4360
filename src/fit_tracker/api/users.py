"""Per-user profile, diary, history and favorites endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from fit_tracker.api.auth import require_api_token
from fit_tracker.api.schemas import (
    MealCreateRequest,
    ProfileUpdateRequest,
    TotalsPayload,
)
from fit_tracker.services.targets import targets_for_energy

if TYPE_CHECKING:
    from fit_tracker.containers import AppContainer

router = APIRouter(
    prefix="/users/{user_id}",
    tags=["users"],
    dependencies=[Depends(require_api_token)],
)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/profile", status_code=status.HTTP_201_CREATED)
async def update_profile(
    user_id: UUID, payload: ProfileUpdateRequest, request: Request
) -> dict[str, object]:
    """Record new body metrics and return the derived targets."""
    container = _container(request)
    profile = container.profile_service.update_profile(user_id, payload.to_metrics())
    return {
        "profile": profile,
        "targets": targets_for_energy(
            profile.energy_target, container.profile_service.config
        ),
    }


@router.get("/profile")
async def current_profile(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the current profile (if any) and the active targets."""
    service = _container(request).profile_service
    return {
        "profile": service.get_current(user_id),
        "targets": service.get_targets(user_id),
    }


@router.get("/profile/history")
async def profile_history(user_id: UUID, request: Request) -> dict[str, object]:
    """Return profile snapshots oldest first, for weight charts."""
    service = _container(request).profile_service
    return {"history": service.list_history(user_id)}


@router.get("/diary/{day}")
async def diary_day(user_id: UUID, day: date, request: Request) -> dict[str, object]:
    """Return a day's entries with its summary."""
    container = _container(request)
    targets = container.profile_service.get_targets(user_id)
    return {
        "summary": container.diary_service.day_summary(user_id, day, targets),
        "entries": container.diary_service.list_day(user_id, day),
    }


@router.post("/diary/{day}/entries", status_code=status.HTTP_201_CREATED)
async def add_entry(
    user_id: UUID, day: date, payload: TotalsPayload, request: Request
) -> dict[str, object]:
    """Log an entry with already-scaled totals."""
    entry = _container(request).diary_service.add_entry(
        user_id, day, payload.name, payload.to_totals()
    )
    return {"entry": entry}


@router.post("/diary/{day}/meals", status_code=status.HTTP_201_CREATED)
async def log_meal(
    user_id: UUID, day: date, payload: MealCreateRequest, request: Request
) -> dict[str, object]:
    """Build a meal from ingredients and log it."""
    try:
        entry = _container(request).diary_service.log_meal(
            user_id,
            day,
            [ingredient.to_domain() for ingredient in payload.ingredients],
            name=payload.name,
            save_as_favorite=payload.save_as_favorite,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {"entry": entry}


@router.post(
    "/diary/{day}/favorites/{favorite_id}", status_code=status.HTTP_201_CREATED
)
async def log_favorite(
    user_id: UUID, day: date, favorite_id: UUID, request: Request
) -> dict[str, object]:
    """Log a favorite meal on the given day."""
    entry = _container(request).diary_service.log_favorite(user_id, favorite_id, day)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"entry": entry}


@router.delete("/entries/{entry_id}")
async def delete_entry(
    user_id: UUID, entry_id: UUID, request: Request
) -> dict[str, str]:
    _container(request).diary_service.delete_entry(user_id, entry_id)
    return {"status": "deleted"}


@router.get("/history")
async def history(user_id: UUID, request: Request) -> dict[str, object]:
    """Return daily summaries for every logged day, newest first."""
    container = _container(request)
    targets = container.profile_service.get_targets(user_id)
    return {"days": container.diary_service.history(user_id, targets)}


@router.get("/favorites")
async def list_favorites(user_id: UUID, request: Request) -> dict[str, object]:
    return {"favorites": _container(request).favorite_service.list_favorites(user_id)}


@router.post("/favorites", status_code=status.HTTP_201_CREATED)
async def save_favorite(
    user_id: UUID, payload: TotalsPayload, request: Request
) -> dict[str, object]:
    favorite = _container(request).favorite_service.save(
        user_id, payload.name, payload.to_totals()
    )
    return {"favorite": favorite}


@router.delete("/favorites/{favorite_id}")
async def delete_favorite(
    user_id: UUID, favorite_id: UUID, request: Request
) -> dict[str, str]:
    _container(request).favorite_service.delete(user_id, favorite_id)
    return {"status": "deleted"}
