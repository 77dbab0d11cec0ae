"""Tally & reveal engine.

Results stay hidden until the host reveals them. Reveal needs at least half
of the group's capacity (rounded up) to have voted, and it is the single event
that both closes voting and exposes the tallies.
"""
import logging
from datetime import datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import commit, utcnow
from app.errors import ConcurrentModification, NotRevealedYet, RevealNotReady
from app.models.ballot import Ballot, Vote
from app.models.category import Category
from app.models.group import Group
from app.models.invite import Invite
from app.services import group_service
from app.services.invite_service import count_invites, ordered_invites
from app.services.setup_service import group_categories

logger = logging.getLogger(__name__)


def reveal_threshold(max_members: int) -> int:
    """ceil(max_members / 2): 5 -> 3, 4 -> 2."""
    return -(-max_members // 2)


def voted_count(db: Session, group: Group) -> int:
    return (
        db.query(func.count(Invite.id))
        .filter(Invite.group_id == group.id, Invite.used_at.isnot(None))
        .scalar()
        or 0
    )


def reveal_allowed(reveal_at: datetime | None, max_members: int, voted: int) -> bool:
    if reveal_at is not None or max_members <= 0:
        return False
    return voted >= reveal_threshold(max_members)


def can_reveal(db: Session, group: Group) -> bool:
    return reveal_allowed(group.reveal_at, group.max_members, voted_count(db, group))


def rank_nominees(category: Category, counts: dict[str, int]) -> list[dict[str, Any]]:
    """Nominees by descending votes; equal counts keep their sort_order."""
    rows = [
        {"nominee_id": nominee.id, "nominee_name": nominee.name, "votes": counts.get(nominee.id, 0)}
        for nominee in category.nominees
    ]
    return sorted(rows, key=lambda row: -row["votes"])


def compute_results(db: Session, group: Group) -> list[dict[str, Any]]:
    """Per-category ranked tallies across every ballot of the group."""
    counts = dict(
        db.query(Vote.nominee_id, func.count(Vote.nominee_id))
        .join(Ballot, Vote.ballot_id == Ballot.id)
        .filter(Ballot.group_id == group.id)
        .group_by(Vote.nominee_id)
        .all()
    )
    return [
        {
            "category_id": category.id,
            "category_name": category.name,
            "nominees": rank_nominees(category, counts),
        }
        for category in group_categories(db, group)
    ]


def _ballot_total(db: Session, group: Group) -> int:
    return db.query(func.count(Ballot.id)).filter(Ballot.group_id == group.id).scalar() or 0


def get_status(db: Session, group: Group, host_token: str | None) -> dict[str, Any]:
    """Participation counters and whether the host may reveal now."""
    group_service.require_host(db, group, host_token)
    voted = voted_count(db, group)
    return {
        "group": group_service.summary(group),
        "max_members": group.max_members,
        "counts": {"total_invites": count_invites(db, group), "voted": voted},
        "threshold": reveal_threshold(group.max_members),
        "can_reveal": reveal_allowed(group.reveal_at, group.max_members, voted),
    }


def reveal(db: Session, group: Group, host_token: str | None) -> datetime:
    """Reveal results (idempotent). Returns the stored reveal timestamp."""
    group_service.require_host(db, group, host_token)

    if group.is_revealed:
        logger.info("Group %s already revealed at %s", group.code, group.reveal_at)
        return group.reveal_at

    voted = voted_count(db, group)
    if not reveal_allowed(group.reveal_at, group.max_members, voted):
        threshold = reveal_threshold(group.max_members)
        logger.info("Reveal rejected for group %s: %d/%d votes", group.code, voted, threshold)
        raise RevealNotReady(
            f"At least {threshold} of {group.max_members} members must vote before revealing "
            f"({voted} so far)"
        )

    if not group_service.bump_version(db, group, require_hidden=True, reveal_at=utcnow()):
        # Another reveal won the race: same outcome, report its timestamp
        if group.is_revealed:
            return group.reveal_at
        raise ConcurrentModification()

    commit(db, "reveal results")
    db.refresh(group)
    logger.info("Revealed results for group %s with %d votes", group.code, voted)
    return group.reveal_at


def _results_payload(db: Session, group: Group) -> dict[str, Any]:
    return {
        "group": group_service.summary(group),
        "total_ballots": _ballot_total(db, group),
        "results": compute_results(db, group),
    }


def host_results(db: Session, group: Group, host_token: str | None) -> dict[str, Any]:
    group_service.require_host(db, group, host_token)
    if not group.is_revealed:
        raise NotRevealedYet()
    return _results_payload(db, group)


def public_results(db: Session, group: Group) -> dict[str, Any]:
    """Results for anyone holding the group code, plus who has voted (no tokens)."""
    if not group.is_revealed:
        raise NotRevealedYet()
    payload = _results_payload(db, group)
    payload["voters"] = [
        {"display_name": invite.display_name, "voted": invite.has_voted}
        for invite in ordered_invites(db, group)
    ]
    return payload
