"""Category schemas."""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class CategoryTranslationIn(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None


class CategoryCreate(BaseModel):
    """Schema for creating a category."""
    translations: Dict[str, CategoryTranslationIn] = Field(default_factory=dict)


class CategoryUpdate(BaseModel):
    """Schema for updating a category."""
    translations: Dict[str, CategoryTranslationIn] = Field(default_factory=dict)
