from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ApplicationCreate(BaseModel):
    first_name: str = Field(..., alias="firstName", min_length=1)
    last_name: str = Field(..., alias="lastName", min_length=1)
    email: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    amount: float
    months: int
    income: float

    model_config = {"populate_by_name": True}


class StatusUpdate(BaseModel):
    # Left untyped so unknown values reach the lifecycle check (400, not 422)
    status: Optional[Any] = None
