"""Group API routes — create a room, poll its status, reveal results."""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.group import GroupCreate, GroupCreated, GroupStatusOut, RevealOut
from app.services import group_service, tally_service

router = APIRouter()


@router.post("", response_model=GroupCreated, status_code=status.HTTP_201_CREATED)
def create_group(payload: GroupCreate, db: Session = Depends(get_db)):
    """Create a group; the creator gets the host invite and its admin link."""
    group, host = group_service.create_group(
        db=db,
        title=payload.title,
        max_members=payload.max_members,
        host_name=payload.host_name,
    )
    return GroupCreated(code=group.code, admin_link=group_service.admin_link(group.code, host.token))


@router.get("/{code}/status", response_model=GroupStatusOut)
def get_status(
    code: str,
    k: Optional[str] = Query(None, description="Host token"),
    db: Session = Depends(get_db),
):
    """Participation counters and reveal readiness (host only)."""
    group = group_service.get_group(db, code)
    return tally_service.get_status(db, group, k)


@router.post("/{code}/reveal", response_model=RevealOut)
def reveal(
    code: str,
    k: Optional[str] = Query(None, description="Host token"),
    db: Session = Depends(get_db),
):
    """Reveal results and close voting. Calling it again is a no-op."""
    group = group_service.get_group(db, code)
    reveal_at = tally_service.reveal(db, group, k)
    return RevealOut(success=True, reveal_at=reveal_at)
