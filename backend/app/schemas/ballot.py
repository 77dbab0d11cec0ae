"""Pydantic schemas for ballots (vote context and submission)."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from app.schemas.group import GroupSummary


class VoteIn(BaseModel):
    category_id: str
    nominee_id: str


class BallotSubmit(BaseModel):
    votes: list[VoteIn] = []


class BallotAccepted(BaseModel):
    success: bool = True
    ballot_id: str


class NomineeOut(BaseModel):
    id: str
    name: str


class CategoryOut(BaseModel):
    id: str
    name: str
    nominees: list[NomineeOut] = []


class BallotInvite(BaseModel):
    display_name: str
    role: str
    used_at: Optional[datetime] = None


class BallotContextOut(BaseModel):
    group: GroupSummary
    invite: BallotInvite
    already_voted: bool
    configured: bool
    categories: list[CategoryOut] = []
