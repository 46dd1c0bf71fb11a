"""Pydantic models for booking requests and responses."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class BookingCreate(BaseModel):
    venue_id: str = Field(..., min_length=1, max_length=64)
    booking_date: date
    booking_time: str = Field(..., min_length=4, max_length=16, examples=["7:30 PM"])
    amount: Decimal = Field(..., ge=0)


class BookingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    venue_id: str
    booking_date: date
    booking_time: str
    amount: Decimal
    status: str
    created_at: datetime | None = None


__all__ = ["BookingCreate", "BookingRead"]
