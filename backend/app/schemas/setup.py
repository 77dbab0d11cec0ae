"""Pydantic schemas for group setup and the catalog listing."""
from typing import Optional
from pydantic import BaseModel


class SetupApply(BaseModel):
    category_keys: list[str] = []


class SetupInserted(BaseModel):
    categories: int
    nominees: int


class SetupApplied(BaseModel):
    success: bool = True
    inserted: SetupInserted


class SetupOut(BaseModel):
    category_keys: list[str]
    has_votes: bool


class CatalogCategoryOut(BaseModel):
    key: str
    name: str
    nominees: list[str]
    sort_order: Optional[int] = None


class CatalogOut(BaseModel):
    edition: str
    categories: list[CatalogCategoryOut]
