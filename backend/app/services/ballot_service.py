"""Ballot engine — one complete ballot per invite.

Per invite the only transition is NotVoted -> Voted. Every rule is checked
before the first write; the ballot row, its votes and the invite's ``used_at``
are committed as a single transaction.
"""
import logging
from typing import Any, Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import commit, utcnow
from app.errors import (
    AlreadyVoted,
    DuplicateCategoryVote,
    IncompleteBallot,
    InvalidCategory,
    InvalidNominee,
    NotConfigured,
    VotingClosed,
    VotingError,
)
from app.models.ballot import Ballot, Vote
from app.models.category import Category
from app.models.group import Group
from app.models.invite import Invite
from app.services import group_service
from app.services.setup_service import group_categories

logger = logging.getLogger(__name__)


def get_ballot_context(db: Session, group: Group, token: str | None) -> dict[str, Any]:
    """Everything a participant page needs: group, own invite and the ballot layout."""
    invite = group_service.resolve_invite(db, group, token)
    categories = group_categories(db, group)
    return {
        "group": group_service.summary(group),
        "invite": {
            "display_name": invite.display_name,
            "role": invite.role.value,
            "used_at": invite.used_at,
        },
        "already_voted": invite.has_voted,
        "configured": bool(categories),
        "categories": [
            {
                "id": category.id,
                "name": category.name,
                "nominees": [{"id": n.id, "name": n.name} for n in category.nominees],
            }
            for category in categories
        ],
    }


def validate_votes(categories: list[Category], votes: list[tuple[str, str]]) -> None:
    """Exactly one vote per category, each for a nominee of that category."""
    if len(votes) != len(categories):
        raise IncompleteBallot(
            f"Incomplete ballot: expected {len(categories)} votes, got {len(votes)}"
        )

    category_ids = {category.id for category in categories}
    seen: set[str] = set()
    for category_id, _ in votes:
        if category_id not in category_ids:
            raise InvalidCategory()
        if category_id in seen:
            raise DuplicateCategoryVote()
        seen.add(category_id)

    nominee_category = {
        nominee.id: category.id
        for category in categories
        for nominee in category.nominees
    }
    for category_id, nominee_id in votes:
        if nominee_category.get(nominee_id) != category_id:
            raise InvalidNominee()


def _check_ballot(db: Session, group: Group, votes: list[tuple[str, str]]) -> None:
    categories = group_categories(db, group)
    if not categories:
        raise NotConfigured()
    validate_votes(categories, votes)


def _claim_invite(db: Session, invite: Invite) -> bool:
    """NotVoted -> Voted as a conditional update; False if already claimed."""
    updated = (
        db.query(Invite)
        .filter(Invite.id == invite.id, Invite.used_at.is_(None))
        .update({Invite.used_at: utcnow()}, synchronize_session=False)
    )
    return updated == 1


def submit_ballot(db: Session, group: Group, token: str | None, votes: Iterable[tuple[str, str]]) -> Ballot:
    """Validate and commit the caller's single ballot."""
    votes = list(votes)

    if group.is_revealed:
        raise VotingClosed()

    invite = group_service.resolve_invite(db, group, token)
    if invite.has_voted:
        raise AlreadyVoted()

    _check_ballot(db, group, votes)

    # Other ballots of the group queue here; a reveal in the meantime closes voting
    if not group_service.lock_group(db, group):
        raise VotingClosed()

    # Setup may have been replaced between the first check and the lock
    try:
        _check_ballot(db, group, votes)
    except VotingError:
        db.rollback()
        raise

    ballot = Ballot(group_id=group.id, invite_id=invite.id)
    db.add(ballot)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.warning("Duplicate ballot for invite %s in group %s", invite.id, group.code)
        raise AlreadyVoted()

    db.add_all(
        Vote(ballot_id=ballot.id, category_id=category_id, nominee_id=nominee_id)
        for category_id, nominee_id in votes
    )

    if not _claim_invite(db, invite):
        db.rollback()
        raise AlreadyVoted()

    commit(db, "cast ballot")
    logger.info("Ballot %s cast in group %s by invite %s", ballot.id, group.code, invite.id)
    return ballot
