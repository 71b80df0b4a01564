"""Daily reminder settings and the user's notification inbox."""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Query

from web import user_store
from web.auth import get_current_user
from web.deps import get_db_path
from web.envelope import ok, paginated
from web.models import NotificationOut, ReminderOut, ReminderSet

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.post("/reminder")
async def set_reminder(
    body: ReminderSet,
    user: dict = Depends(get_current_user),
    db_path: Path = Depends(get_db_path),
):
    user_store.set_reminder_time(user["id"], body.time, db_path=db_path)
    return ok(ReminderOut(reminder_time=body.time), "Daily reminder set successfully")


@router.get("/reminder")
async def get_reminder(
    user: dict = Depends(get_current_user),
    db_path: Path = Depends(get_db_path),
):
    return ok(ReminderOut(reminder_time=user_store.get_reminder_time(user["id"], db_path=db_path)))


@router.delete("/reminder")
async def remove_reminder(
    user: dict = Depends(get_current_user),
    db_path: Path = Depends(get_db_path),
):
    user_store.clear_reminder_time(user["id"], db_path=db_path)
    return ok(ReminderOut(reminder_time=None), "Daily reminder removed successfully")


@router.get("")
async def list_notifications(
    limit: int = Query(20, ge=1, le=100),
    page: int = Query(1, ge=1),
    unread_only: bool = Query(False, alias="unreadOnly"),
    user: dict = Depends(get_current_user),
    db_path: Path = Depends(get_db_path),
):
    """Newest first."""
    items = user_store.list_notifications(
        user["id"], limit=limit, offset=(page - 1) * limit, unread_only=unread_only, db_path=db_path
    )
    total = user_store.count_notifications(user["id"], unread_only=unread_only, db_path=db_path)
    return paginated([NotificationOut.model_validate(n) for n in items], total, page, limit)


@router.put("/{notification_id}/read")
async def mark_read(
    notification_id: str,
    user: dict = Depends(get_current_user),
    db_path: Path = Depends(get_db_path),
):
    notification = user_store.mark_notification_read(user["id"], notification_id, db_path=db_path)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return ok(NotificationOut.model_validate(notification), "Notification marked as read")
