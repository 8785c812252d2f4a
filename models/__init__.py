from models.application import APPLICATION_STATUSES, CreditApplication
from models.message import MESSAGE_AUTHORS, ApplicationMessage

__all__ = [
    "APPLICATION_STATUSES",
    "MESSAGE_AUTHORS",
    "CreditApplication",
    "ApplicationMessage",
]
