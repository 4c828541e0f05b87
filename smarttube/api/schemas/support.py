from __future__ import annotations

from pydantic import BaseModel, Field


class SupportFormRequest(BaseModel):
    form_type: str
    name: str = Field(..., max_length=120)
    email: str = Field(..., max_length=255)
    fields: dict[str, str] = Field(default_factory=dict)


class SupportFormResponse(BaseModel):
    success: bool
    message: str
