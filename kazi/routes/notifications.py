from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from kazi.dependencies import owner_repository
from kazi.exceptions import BadRequestError
from kazi.models.notification import Notification
from kazi.schemas.notification import NotificationCreate, NotificationUpdate, NotificationResponse
from kazi.services.scoped_repository import ScopedRepository
from kazi.logging_config import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/notifications", tags=["notifications"])

get_notification_repository = owner_repository(Notification, "Notification")


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(repository: ScopedRepository = Depends(get_notification_repository)):
    """Get the caller's notifications, newest first"""
    return await repository.list(Notification.created_at.desc(), Notification.id.desc())


@router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(
    notification_id: int,
    repository: ScopedRepository = Depends(get_notification_repository)
):
    return await repository.get(notification_id)


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    notification_data: NotificationCreate,
    request: Request,
    response: Response,
    repository: ScopedRepository = Depends(get_notification_repository)
):
    """Create a notification for the caller without trusting a body userID"""
    notification = await repository.create(**notification_data.model_dump(exclude={"user_id"}))
    response.headers["Location"] = str(
        request.url_for("get_notification", notification_id=notification.id)
    )
    return notification


@router.put("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_notification(
    notification_id: int,
    notification_data: NotificationUpdate,
    repository: ScopedRepository = Depends(get_notification_repository)
):
    if notification_id != notification_data.id:
        raise BadRequestError("Notification ID mismatch.")

    await repository.update(
        notification_id, **notification_data.model_dump(exclude={"id", "user_id"})
    )
    return None


@router.patch("/{notification_id}/mark-as-read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_notification_as_read(
    notification_id: int,
    repository: ScopedRepository = Depends(get_notification_repository)
):
    await repository.update(notification_id, is_read=True)
    return None


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: int,
    repository: ScopedRepository = Depends(get_notification_repository)
):
    await repository.delete(notification_id)
    return None
