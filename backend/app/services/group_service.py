"""Group lifecycle service.

Responsibilities:
- Create a group together with its single host invite
- Resolve a group by public code and an invite by (group, token)
- Host authorization: a token must resolve to the host invite of the same group
- Per-group serialization point on ``Group.version``: compare-and-set for
  writers that depend on what they read, an unconditional row lock for ballots
"""
import logging
import secrets
from typing import Any

from sqlalchemy.orm import Session

from app.config import settings
from app.database import commit
from app.errors import NotFound, StoreError, Unauthorized, ValidationError
from app.models.group import Group
from app.models.invite import Invite, InviteRole

logger = logging.getLogger(__name__)


def generate_code() -> str:
    """Short, human-typeable public group code."""
    alphabet = settings.GROUP_CODE_ALPHABET
    return "".join(secrets.choice(alphabet) for _ in range(settings.GROUP_CODE_LENGTH))


def generate_token() -> str:
    """Unguessable invite token (hex)."""
    return secrets.token_hex(settings.TOKEN_BYTES)


def build_link(path: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}{path}"


def admin_link(code: str, token: str) -> str:
    return build_link(f"/host/{code}?k={token}")


def invite_link(code: str, token: str) -> str:
    return build_link(f"/g/{code}?t={token}")


def results_link(code: str) -> str:
    return build_link(f"/r/{code}")


def clean_display_name(name: Any, field: str = "display_name") -> str:
    """Trim a participant name and enforce 1..DISPLAY_NAME_MAX_LENGTH characters."""
    if not isinstance(name, str):
        raise ValidationError(f"{field} is required")
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError(f"{field} is required")
    if len(cleaned) > settings.DISPLAY_NAME_MAX_LENGTH:
        raise ValidationError(
            f"Name is too long (max {settings.DISPLAY_NAME_MAX_LENGTH} characters)"
        )
    return cleaned


def _unused_code(db: Session) -> str:
    for _ in range(settings.GROUP_CODE_ATTEMPTS):
        code = generate_code()
        if not db.query(Group.id).filter(Group.code == code).first():
            return code
        logger.info("Group code collision on %s, retrying", code)
    logger.error("No free group code after %d attempts", settings.GROUP_CODE_ATTEMPTS)
    raise StoreError()


def create_group(db: Session, title: Any, max_members: Any, host_name: Any) -> tuple[Group, Invite]:
    """Create a group and its host invite in one transaction."""
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("title is required")
    title = title.strip()
    if len(title) > 150:
        raise ValidationError("Title is too long (max 150 characters)")

    host_name = clean_display_name(host_name, field="host_name")

    if isinstance(max_members, bool) or not isinstance(max_members, int):
        raise ValidationError("max_members must be an integer")
    if max_members < 1:
        raise ValidationError("max_members must be at least 1")
    if max_members > settings.MAX_GROUP_SIZE:
        raise ValidationError(f"max_members must be at most {settings.MAX_GROUP_SIZE}")

    group = Group(code=_unused_code(db), title=title, max_members=max_members, version=1)
    db.add(group)
    db.flush()

    host = Invite(
        group_id=group.id,
        token=generate_token(),
        display_name=host_name,
        role=InviteRole.host,
    )
    db.add(host)
    commit(db, "create group")
    db.refresh(group)
    db.refresh(host)
    logger.info("Created group '%s' (%s) for %d members", group.title, group.code, group.max_members)
    return group, host


def get_group(db: Session, code: str) -> Group:
    """Fetch a group by its public code (case-insensitive)."""
    group = db.query(Group).filter(Group.code == code.strip().upper()).first()
    if not group:
        raise NotFound("Group not found")
    return group


def resolve_invite(db: Session, group: Group, token: str | None) -> Invite:
    """Resolve a token to an invite of this group; any other outcome is Unauthorized."""
    if not token:
        raise Unauthorized("Missing token")
    invite = (
        db.query(Invite)
        .filter(Invite.group_id == group.id, Invite.token == token)
        .first()
    )
    if not invite:
        raise Unauthorized("Invalid invite token")
    return invite


def require_host(db: Session, group: Group, token: str | None) -> Invite:
    """Only the host invite of this very group may manage it."""
    try:
        invite = resolve_invite(db, group, token)
    except Unauthorized:
        raise Unauthorized("Unauthorized")
    if invite.role != InviteRole.host:
        raise Unauthorized("Unauthorized")
    return invite


def bump_version(db: Session, group: Group, require_hidden: bool = False, **values: Any) -> bool:
    """Advance ``group.version`` if nobody else has since the group was read.

    Runs as the first write of a unit of work, so losing the race leaves
    nothing behind. Extra keyword arguments are column values written in the
    same statement. Returns False (after rolling back) when another request
    got there first.
    """
    read_version = group.version
    query = db.query(Group).filter(Group.id == group.id, Group.version == read_version)
    if require_hidden:
        query = query.filter(Group.reveal_at.is_(None))

    changes: dict[Any, Any] = {Group.version: Group.version + 1}
    for column, value in values.items():
        changes[getattr(Group, column)] = value

    updated = query.update(changes, synchronize_session=False)
    if updated != 1:
        db.rollback()
        logger.warning("Concurrent modification of group %s (read version %s)", group.code, read_version)
        return False
    return True


def lock_group(db: Session, group: Group) -> bool:
    """Take the group row lock for a ballot while voting is still open.

    Unlike ``bump_version`` this does not care which version was read: a
    second writer waits for the first one to commit and then goes ahead.
    Still advances the version so setup and reveal notice the new ballot.
    Returns False (after rolling back) once the group has been revealed.
    """
    updated = (
        db.query(Group)
        .filter(Group.id == group.id, Group.reveal_at.is_(None))
        .update({Group.version: Group.version + 1}, synchronize_session=False)
    )
    if updated != 1:
        db.rollback()
        logger.info("Group %s closed to ballots", group.code)
        return False
    return True


def summary(group: Group) -> dict[str, Any]:
    return {"title": group.title, "code": group.code, "reveal_at": group.reveal_at}
