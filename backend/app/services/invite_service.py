"""Invite service — issue, list and relabel participant invites."""
import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import commit
from app.errors import CapacityExceeded, ConcurrentModification, Forbidden, NotFound, ValidationError
from app.models.group import Group
from app.models.invite import Invite, InviteRole
from app.services import group_service

logger = logging.getLogger(__name__)

GUEST_PLACEHOLDER_NAME = "Guest"


def count_invites(db: Session, group: Group) -> int:
    return db.query(func.count(Invite.id)).filter(Invite.group_id == group.id).scalar() or 0


def ordered_invites(db: Session, group: Group) -> list[Invite]:
    """Invites in creation order; id breaks ties so polling never reorders the list."""
    return (
        db.query(Invite)
        .filter(Invite.group_id == group.id)
        .order_by(Invite.created_at, Invite.id)
        .all()
    )


def list_invites(db: Session, group: Group, host_token: str | None) -> list[Invite]:
    group_service.require_host(db, group, host_token)
    return ordered_invites(db, group)


def issue_invites(db: Session, group: Group, host_token: str | None, count: Any) -> list[Invite]:
    """Create ``count`` guest invites, all or nothing, within remaining capacity."""
    group_service.require_host(db, group, host_token)

    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValidationError("Invalid count")

    existing = count_invites(db, group)
    if existing + count > group.max_members:
        logger.info(
            "Rejected %d invites for group %s: %d of %d already issued",
            count, group.code, existing, group.max_members,
        )
        raise CapacityExceeded(
            f"Exceeds max members: {existing} of {group.max_members} invites already issued"
        )

    # Capacity was checked against this version; a concurrent issuer loses here
    if not group_service.bump_version(db, group):
        raise ConcurrentModification()

    invites = [
        Invite(
            group_id=group.id,
            token=group_service.generate_token(),
            display_name=GUEST_PLACEHOLDER_NAME,
            role=InviteRole.guest,
        )
        for _ in range(count)
    ]
    db.add_all(invites)
    commit(db, "issue invites")
    for invite in invites:
        db.refresh(invite)
    logger.info("Issued %d guest invites for group %s", count, group.code)
    return invites


def rename_invite(db: Session, group: Group, host_token: str | None, invite_id: str, new_name: Any) -> Invite:
    """Relabel an invite of this group."""
    group_service.require_host(db, group, host_token)
    display_name = group_service.clean_display_name(new_name)

    invite = db.query(Invite).filter(Invite.id == invite_id).first()
    if not invite:
        raise NotFound("Invite not found")
    if invite.group_id != group.id:
        raise Forbidden("Invite does not belong to this group")

    invite.display_name = display_name
    commit(db, "rename invite")
    db.refresh(invite)
    logger.info("Renamed invite %s in group %s", invite.id, group.code)
    return invite
