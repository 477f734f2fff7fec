from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query

from betledger.api.v1.deps import get_notification_registry
from betledger.services.notification_service import NotificationRegistry, best_bet_notification

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("/subscribe")
async def subscribe(registry: NotificationRegistry = Depends(get_notification_registry)) -> dict:
    subscriber = registry.subscribe()
    return {
        "session_id": subscriber.session_id,
        "subscribed": True,
        "message": "Successfully subscribed to notifications",
    }


@router.post("/unsubscribe")
async def unsubscribe(
    session_id: str = Query(...),
    registry: NotificationRegistry = Depends(get_notification_registry),
) -> dict:
    registry.unsubscribe(session_id)
    return {"subscribed": False, "message": "Successfully unsubscribed from notifications"}


@router.post("/preferences")
async def update_preferences(
    session_id: str = Query(...),
    enable_best_bets: bool = Query(default=True),
    enable_high_value: bool = Query(default=True),
    min_value: float = Query(default=100.0, ge=0),
    registry: NotificationRegistry = Depends(get_notification_registry),
) -> dict:
    subscriber = registry.update_preferences(session_id, enable_best_bets, enable_high_value, min_value)
    if subscriber is None:
        raise HTTPException(status_code=404, detail=f"Unknown subscriber: {session_id}")
    return {"success": True, "preferences": asdict(subscriber)}


@router.get("/test")
async def test_notification(session_id: str = Query(...)) -> dict:
    notification = best_bet_notification("Chiefs vs Bills", "Chiefs -3", -110, 235.0, "DraftKings")
    return {"session_id": session_id, "notification": asdict(notification), "message": "Test notification created"}


@router.get("/stats")
async def stats(registry: NotificationRegistry = Depends(get_notification_registry)) -> dict:
    return {"active_subscribers": registry.subscriber_count, "status": "active"}
