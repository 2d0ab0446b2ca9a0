from app.models.analytics import Analytics
from app.models.collection import Collection
from app.models.dustbin import Dustbin
from app.models.notification import Notification
from app.models.user_profile import UserProfile

__all__ = [
    "Analytics",
    "Collection",
    "Dustbin",
    "Notification",
    "UserProfile",
]
