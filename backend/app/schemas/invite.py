"""Pydantic schemas for Invites."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class InviteIssue(BaseModel):
    count: int = Field(..., description="Number of guest invites to create")


class InviteRename(BaseModel):
    display_name: str


class InviteOut(BaseModel):
    id: str
    display_name: str
    role: str
    used_at: Optional[datetime] = None
    token: str
    link: str


class VoterOut(BaseModel):
    """Public view of an invite: no id, no token."""
    display_name: str
    voted: bool
