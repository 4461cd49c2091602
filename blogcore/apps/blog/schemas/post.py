"""Post schemas."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class PostTranslationIn(BaseModel):
    """Translated attributes of a post for one locale."""
    title: Optional[str] = None
    body: Optional[str] = None
    custom_url: Optional[str] = None
    custom_teaser: Optional[str] = None
    slug: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None


class PostCreate(BaseModel):
    """Schema for creating a post."""
    draft: bool = False
    published_at: Optional[datetime] = None
    user_id: Optional[int] = None
    username: Optional[str] = None
    source_url: Optional[str] = None
    translations: Dict[str, PostTranslationIn] = Field(default_factory=dict)
    category_ids: List[int] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class PostUpdate(BaseModel):
    """Schema for updating a post.

    Locales listed in ``translations`` are merged into the stored row;
    other locales are left alone.
    """
    draft: Optional[bool] = None
    published_at: Optional[datetime] = None
    user_id: Optional[int] = None
    username: Optional[str] = None
    source_url: Optional[str] = None
    translations: Dict[str, PostTranslationIn] = Field(default_factory=dict)
    category_ids: Optional[List[int]] = None
    tags: Optional[List[str]] = None


class CommentCreate(BaseModel):
    name: str
    email: str
    message: str
