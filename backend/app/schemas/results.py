"""Pydantic schemas for tallied results."""
from pydantic import BaseModel

from app.schemas.group import GroupSummary
from app.schemas.invite import VoterOut


class NomineeResult(BaseModel):
    nominee_id: str
    nominee_name: str
    votes: int


class CategoryResult(BaseModel):
    category_id: str
    category_name: str
    nominees: list[NomineeResult]


class ResultsOut(BaseModel):
    group: GroupSummary
    total_ballots: int
    results: list[CategoryResult]


class PublicResultsOut(ResultsOut):
    voters: list[VoterOut]
