"""
Catalog Routes

Field catalog and field -> leaf index lookup.
"""

from fastapi import APIRouter

from api.deps import get_catalog
from api.models.responses import CatalogEntry, CatalogResponse, IndexResponse


router = APIRouter(tags=["catalog"])


@router.get("/catalog", response_model=CatalogResponse)
async def list_catalog() -> CatalogResponse:
    catalog = get_catalog()
    return CatalogResponse(
        size=catalog.size,
        depth=catalog.depth,
        token_width=catalog.token_width,
        fields=[
            CatalogEntry(field_name=name, index=catalog.index_of(name))
            for name in catalog.field_names
        ],
    )


@router.get("/index/{field_name}", response_model=IndexResponse)
async def field_index(field_name: str) -> IndexResponse:
    """
    Leaf index of a field.

    Unknown fields are a 404 FIELD_NOT_FOUND.
    """
    return IndexResponse(field_name=field_name, index=get_catalog().index_of(field_name))
