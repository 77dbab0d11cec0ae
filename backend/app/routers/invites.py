"""Invite API routes — host-only management of participant invites."""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.group import Group
from app.models.invite import Invite
from app.schemas.invite import InviteIssue, InviteOut, InviteRename
from app.services import group_service, invite_service

router = APIRouter()


def _invite_out(group: Group, invite: Invite) -> InviteOut:
    return InviteOut(
        id=invite.id,
        display_name=invite.display_name,
        role=invite.role.value,
        used_at=invite.used_at,
        token=invite.token,
        link=group_service.invite_link(group.code, invite.token),
    )


@router.get("/{code}/invites", response_model=list[InviteOut])
def list_invites(
    code: str,
    k: Optional[str] = Query(None, description="Host token"),
    db: Session = Depends(get_db),
):
    """All invites of the group in creation order, with their links."""
    group = group_service.get_group(db, code)
    return [_invite_out(group, invite) for invite in invite_service.list_invites(db, group, k)]


@router.post("/{code}/invites", response_model=list[InviteOut], status_code=status.HTTP_201_CREATED)
def issue_invites(
    code: str,
    payload: InviteIssue,
    k: Optional[str] = Query(None, description="Host token"),
    db: Session = Depends(get_db),
):
    """Create a batch of guest invites within the group's remaining capacity."""
    group = group_service.get_group(db, code)
    invites = invite_service.issue_invites(db, group, k, payload.count)
    return [_invite_out(group, invite) for invite in invites]


@router.patch("/{code}/invites/{invite_id}", response_model=InviteOut)
def rename_invite(
    code: str,
    invite_id: str,
    payload: InviteRename,
    k: Optional[str] = Query(None, description="Host token"),
    db: Session = Depends(get_db),
):
    """Give an invite a display name."""
    group = group_service.get_group(db, code)
    invite = invite_service.rename_invite(db, group, k, invite_id, payload.display_name)
    return _invite_out(group, invite)
