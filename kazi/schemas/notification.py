from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class NotificationBase(BaseModel):
    message: str = Field(min_length=1, max_length=1000)
    is_read: bool = Field(default=False, alias="isRead")

    class Config:
        from_attributes = True
        populate_by_name = True


class NotificationCreate(NotificationBase):
    user_id: Optional[int] = Field(default=None, alias="userID")


class NotificationUpdate(NotificationCreate):
    id: int = Field(alias="notificationID")


class NotificationResponse(NotificationBase):
    id: int = Field(alias="notificationID")
    user_id: int = Field(alias="userID")
    created_at: datetime = Field(alias="createdAt")
