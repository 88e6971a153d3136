"""
Read-only endpoints over the static product catalog.
"""

from typing import Optional

from fastapi import APIRouter

from sports_store.core.exceptions import NotFoundError
from sports_store.services.catalog_service import catalog_service

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/categories")
async def list_categories():
    return {"categories": [c.to_dict() for c in catalog_service.get_categories()]}


@router.get("/categories/{category_id}")
async def get_category(category_id: str):
    category = catalog_service.get_category_by_id(category_id)
    if category is None:
        raise NotFoundError(f"Category '{category_id}' not found")
    return category.to_dict()


@router.get("/categories/{category_id}/product-types")
async def list_category_product_types(category_id: str):
    if catalog_service.get_category_by_id(category_id) is None:
        raise NotFoundError(f"Category '{category_id}' not found")
    return {
        "category": category_id,
        "product_types": [t.to_dict() for t in catalog_service.get_product_types_by_category(category_id)],
    }


@router.get("/sport-types")
async def list_sport_types():
    return {"sport_types": [s.to_dict() for s in catalog_service.get_sport_types()]}


@router.get("/product-types")
async def list_product_types(category: Optional[str] = None):
    """All product types, or only those of `category` when given."""
    if category:
        types = catalog_service.get_product_types_by_category(category)
    else:
        types = catalog_service.get_all_product_types()
    return {"product_types": [t.to_dict() for t in types]}
