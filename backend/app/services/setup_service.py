"""Setup service — copy selected catalog categories into a group.

Setup can be replaced any number of times until the first ballot exists;
after that it is locked for good. Every replacement regenerates all
Category/Nominee rows, so their ids change even for reselected categories.
"""
import logging
from typing import Any

from sqlalchemy.orm import Session, selectinload

from app.catalog import Catalog, CatalogCategory
from app.database import commit
from app.errors import ConcurrentModification, SetupLocked, ValidationError
from app.models.ballot import Ballot
from app.models.category import Category, Nominee
from app.models.group import Group
from app.services import group_service

logger = logging.getLogger(__name__)


def has_ballots(db: Session, group: Group) -> bool:
    return db.query(Ballot.id).filter(Ballot.group_id == group.id).first() is not None


def group_categories(db: Session, group: Group) -> list[Category]:
    """The group's categories by sort_order, nominees preloaded in their own order."""
    return (
        db.query(Category)
        .options(selectinload(Category.nominees))
        .filter(Category.group_id == group.id)
        .order_by(Category.sort_order, Category.id)
        .all()
    )


def select_categories(catalog: Catalog, category_keys: list[str]) -> list[CatalogCategory]:
    """Known catalog entries for the selected keys, in catalog display order.

    Unknown and repeated keys are ignored. Entries without an order hint
    follow the hinted ones in selection order.
    """
    wanted = {key: index for index, key in reversed(list(enumerate(category_keys)))}
    selected = [entry for entry in catalog.ordered() if entry.key in wanted]
    hinted = [entry for entry in selected if entry.sort_order is not None]
    unhinted = sorted(
        (entry for entry in selected if entry.sort_order is None),
        key=lambda entry: wanted[entry.key],
    )
    return hinted + unhinted


def apply_setup(
    db: Session,
    group: Group,
    host_token: str | None,
    category_keys: Any,
    catalog: Catalog,
) -> tuple[int, int]:
    """Replace the group's categories/nominees. Returns (categories, nominees) inserted."""
    group_service.require_host(db, group, host_token)

    if not isinstance(category_keys, list) or not category_keys:
        raise ValidationError("Select at least 1 category")

    selected = select_categories(catalog, [key for key in category_keys if isinstance(key, str)])
    if not selected:
        raise ValidationError("No valid categories selected")

    if has_ballots(db, group):
        logger.info("Setup change rejected for group %s: ballots exist", group.code)
        raise SetupLocked()

    # A ballot committed after the check above would have advanced the version
    if not group_service.bump_version(db, group):
        raise ConcurrentModification()

    for category in group_categories(db, group):
        db.delete(category)
    db.flush()

    nominee_total = 0
    for position, entry in enumerate(selected, start=1):
        category = Category(group_id=group.id, name=entry.name, sort_order=position)
        category.nominees = [
            Nominee(name=name, sort_order=index)
            for index, name in enumerate(entry.nominees, start=1)
        ]
        nominee_total += len(category.nominees)
        db.add(category)

    commit(db, "apply setup")
    logger.info(
        "Applied setup for group %s: %d categories, %d nominees",
        group.code, len(selected), nominee_total,
    )
    return len(selected), nominee_total


def get_setup(db: Session, group: Group, host_token: str | None, catalog: Catalog) -> dict[str, Any]:
    """Selected catalog keys plus the lock flag (host only, since it reveals lock status)."""
    group_service.require_host(db, group, host_token)

    category_keys = []
    for category in group_categories(db, group):
        entry = catalog.by_name(category.name)
        if entry is not None:
            category_keys.append(entry.key)

    return {"category_keys": category_keys, "has_votes": has_ballots(db, group)}
