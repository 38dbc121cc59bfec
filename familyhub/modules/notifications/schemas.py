from pydantic import BaseModel
from datetime import datetime


class NotificationResponse(BaseModel):
    id: int
    family_id: int
    user_id: int
    type: str
    title: str
    message: str
    read: bool
    created_at: datetime

    class Config:
        from_attributes = True
