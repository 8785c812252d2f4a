from schemas.application import ApplicationCreate, StatusUpdate
from schemas.message import AdminMessageCreate, MessageCreate

__all__ = [
    "AdminMessageCreate",
    "ApplicationCreate",
    "MessageCreate",
    "StatusUpdate",
]
