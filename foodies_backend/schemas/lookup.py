"""Lookup tables and testimonials."""
from datetime import datetime
from pydantic import BaseModel


class LookupItem(BaseModel):
    id: int
    name: str


class TestimonialItem(BaseModel):
    id: int
    testimonial: str
    created_at: datetime
    owner_name: str | None = None
    owner_avatar: str | None = None
