from eventhub.models.assistance import Assistance
from eventhub.models.base import Base
from eventhub.models.event import Event
from eventhub.models.friendship import Friendship
from eventhub.models.message import Message
from eventhub.models.user import User

__all__ = [
    "Assistance",
    "Base",
    "Event",
    "Friendship",
    "Message",
    "User",
]
