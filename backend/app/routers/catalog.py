"""Catalog API route."""
from fastapi import APIRouter, Depends

from app.catalog import Catalog, get_catalog
from app.schemas.setup import CatalogCategoryOut, CatalogOut

router = APIRouter()


@router.get("", response_model=CatalogOut)
def list_catalog(catalog: Catalog = Depends(get_catalog)):
    return CatalogOut(
        edition=catalog.edition,
        categories=[
            CatalogCategoryOut(
                key=entry.key,
                name=entry.name,
                nominees=list(entry.nominees),
                sort_order=entry.sort_order,
            )
            for entry in catalog.ordered()
        ],
    )
