from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    """Applicant message; `from` is accepted for compatibility but only "user" is allowed."""

    message: str
    from_: Optional[str] = Field(None, alias="from")

    model_config = {"populate_by_name": True}


class AdminMessageCreate(BaseModel):
    """Reviewer message; the author is always admin, whatever the body says."""

    message: str
