# app/schemas/slot_schema.py
from pydantic import BaseModel, ConfigDict, Field


class SlotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    time: str = Field(..., description="Slot start, HH:MM 24h")
    available: bool
    datetime: str = Field(..., description="<date>T<time>:00.000Z")


__all__ = ["SlotResponse"]
