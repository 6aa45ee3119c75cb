"""Pydantic v2 models for the text message template page."""

from pydantic import BaseModel, Field

from .document import Document


class TemplateRecord(BaseModel):
    """One stock category's pre-formatted price message lines."""

    price_stock_category: str = Field(min_length=1)
    text_head: str
    text_c_kg: str


class TemplateSet(Document):
    templates: list[TemplateRecord] = Field(default_factory=list)
