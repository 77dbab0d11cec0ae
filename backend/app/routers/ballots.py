"""Ballot API routes — what a participant sees and how they vote."""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.ballot import BallotAccepted, BallotContextOut, BallotSubmit
from app.services import ballot_service, group_service

router = APIRouter()


@router.get("/{code}/vote", response_model=BallotContextOut)
def get_ballot_context(
    code: str,
    t: Optional[str] = Query(None, description="Invite token"),
    db: Session = Depends(get_db),
):
    """Group, invite and category/nominee layout for the token holder."""
    group = group_service.get_group(db, code)
    return ballot_service.get_ballot_context(db, group, t)


@router.post("/{code}/vote", response_model=BallotAccepted, status_code=status.HTTP_201_CREATED)
def submit_ballot(
    code: str,
    payload: BallotSubmit,
    t: Optional[str] = Query(None, description="Invite token"),
    db: Session = Depends(get_db),
):
    """Cast the token holder's one and only ballot."""
    group = group_service.get_group(db, code)
    ballot = ballot_service.submit_ballot(
        db,
        group,
        t,
        [(vote.category_id, vote.nominee_id) for vote in payload.votes],
    )
    return BallotAccepted(ballot_id=ballot.id)
