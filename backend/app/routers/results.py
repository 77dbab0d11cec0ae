"""Results API routes. Both views stay closed until the group is revealed."""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.results import PublicResultsOut, ResultsOut
from app.services import group_service, tally_service

router = APIRouter()


@router.get("/{code}/results", response_model=ResultsOut)
def host_results(
    code: str,
    k: Optional[str] = Query(None, description="Host token"),
    db: Session = Depends(get_db),
):
    group = group_service.get_group(db, code)
    return tally_service.host_results(db, group, k)


@router.get("/{code}/public-results", response_model=PublicResultsOut)
def public_results(code: str, db: Session = Depends(get_db)):
    """No token needed once results are revealed; voters are listed by name only."""
    group = group_service.get_group(db, code)
    return tally_service.public_results(db, group)
