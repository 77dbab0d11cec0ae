"""Pydantic schemas for Groups, status and reveal."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class GroupCreate(BaseModel):
    title: str
    host_name: str
    max_members: int = Field(..., description="Capacity, including the host")


class GroupCreated(BaseModel):
    code: str
    admin_link: str


class GroupSummary(BaseModel):
    title: str
    code: str
    reveal_at: Optional[datetime] = None


class GroupStatusCounts(BaseModel):
    total_invites: int
    voted: int


class GroupStatusOut(BaseModel):
    group: GroupSummary
    max_members: int
    counts: GroupStatusCounts
    threshold: int
    can_reveal: bool


class RevealOut(BaseModel):
    success: bool = True
    reveal_at: datetime
