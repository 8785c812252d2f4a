from datetime import datetime
from typing import Any, Optional

from models import ApplicationMessage, CreditApplication


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def app_to_response(app: CreditApplication) -> dict[str, Any]:
    """Serialize application to dict with camelCase for frontend."""
    return {
        "applicationId": app.application_id,
        "status": app.status,
        "firstName": app.first_name,
        "lastName": app.last_name,
        "email": app.email,
        "country": app.country,
        "city": app.city,
        "address": app.address,
        "amount": app.amount,
        "months": app.months,
        "income": app.income,
        "createdAt": _iso(app.created_at),
        "updatedAt": _iso(app.updated_at),
    }


def message_to_response(m: ApplicationMessage) -> dict[str, Any]:
    # "message"/"from" are the names the existing frontend reads
    return {
        "id": m.id,
        "applicationId": m.application_id,
        "body": m.body,
        "author": m.author,
        "message": m.body,
        "from": m.author,
        "createdAt": _iso(m.created_at),
    }
