"""Setup API routes: choose the group's categories from the catalog."""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.catalog import Catalog, get_catalog
from app.database import get_db
from app.schemas.setup import SetupApplied, SetupApply, SetupInserted, SetupOut
from app.services import group_service, setup_service

router = APIRouter()


@router.get("/{code}/setup", response_model=SetupOut)
def get_setup(
    code: str,
    k: Optional[str] = Query(None, description="Host token"),
    db: Session = Depends(get_db),
    catalog: Catalog = Depends(get_catalog),
):
    """Currently selected catalog keys and whether setup is locked by votes."""
    group = group_service.get_group(db, code)
    return setup_service.get_setup(db, group, k, catalog)


@router.post("/{code}/setup", response_model=SetupApplied)
def apply_setup(
    code: str,
    payload: SetupApply,
    k: Optional[str] = Query(None, description="Host token"),
    db: Session = Depends(get_db),
    catalog: Catalog = Depends(get_catalog),
):
    """Replace the group's categories and nominees (until the first ballot)."""
    group = group_service.get_group(db, code)
    categories, nominees = setup_service.apply_setup(db, group, k, payload.category_keys, catalog)
    return SetupApplied(inserted=SetupInserted(categories=categories, nominees=nominees))
