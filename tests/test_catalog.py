import httpx
import pytest
from fastapi.testclient import TestClient

from sports_store.main import app
from sports_store.services.catalog_service import (
    PRODUCT_CATEGORIES,
    PRODUCT_TYPES,
    UNKNOWN_NAME,
    catalog_service,
)


@pytest.fixture
def api():
    return TestClient(app)


def test_categories_are_the_six_top_level_groups():
    ids = [c.id for c in catalog_service.get_categories()]
    assert ids == ["ao", "quan", "giay", "kinh", "dung-cu", "phu-kien"]


def test_lookups_by_id():
    assert catalog_service.get_category_name("giay") == "Giày"
    assert catalog_service.get_sport_type_by_id("swimming").name == "Bơi lội"
    assert catalog_service.get_product_type_by_id("kinh-swimming").category == "kinh"
    assert catalog_service.get_product_type_name("phu-kien-binh-nuoc") == "Bình nước"


@pytest.mark.parametrize("lookup", [
    catalog_service.get_category_name,
    catalog_service.get_sport_type_name,
    catalog_service.get_product_type_name,
])
def test_unknown_id_yields_placeholder_name(lookup):
    assert lookup("does-not-exist") == UNKNOWN_NAME


def test_unknown_id_yields_none():
    assert catalog_service.get_category_by_id("nope") is None
    assert catalog_service.get_sport_type_by_id("nope") is None
    assert catalog_service.get_product_type_by_id("nope") is None


def test_product_types_filtered_by_category():
    glasses = catalog_service.get_product_types_by_category("kinh")
    assert [t.id for t in glasses] == ["kinh-swimming", "kinh-cycling", "kinh-outdoor", "kinh-running"]
    assert catalog_service.get_product_types_by_category("nope") == []


def test_every_product_type_belongs_to_a_known_category():
    category_ids = {c.id for c in PRODUCT_CATEGORIES}
    assert all(t.category in category_ids for t in PRODUCT_TYPES)
    assert len({t.id for t in PRODUCT_TYPES}) == len(PRODUCT_TYPES)


def test_returned_lists_are_copies():
    catalog_service.get_categories().clear()
    assert len(catalog_service.get_categories()) == 6


def test_list_categories_endpoint(api):
    response = api.get("/api/catalog/categories")
    assert response.status_code == 200
    first = response.json()["categories"][0]
    assert first == {"id": "ao", "name": "Áo", "description": "Áo thể thao các loại", "icon": "👕"}


def test_category_endpoint(api):
    assert api.get("/api/catalog/categories/quan").json()["name"] == "Quần"

    response = api.get("/api/catalog/categories/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Category 'nope' not found"}


def test_category_product_types_endpoint(api):
    body = api.get("/api/catalog/categories/giay/product-types").json()
    assert body["category"] == "giay"
    assert {t["category"] for t in body["product_types"]} == {"giay"}

    assert api.get("/api/catalog/categories/nope/product-types").status_code == 404


def test_sport_types_endpoint(api):
    sport_types = api.get("/api/catalog/sport-types").json()["sport_types"]
    assert len(sport_types) == 11
    assert sport_types[-1]["id"] == "other"


def test_product_types_endpoint(api):
    everything = api.get("/api/catalog/product-types").json()["product_types"]
    assert len(everything) == len(PRODUCT_TYPES)

    accessories = api.get("/api/catalog/product-types", params={"category": "phu-kien"}).json()["product_types"]
    assert len(accessories) == 7


@pytest.mark.asyncio
async def test_catalog_over_async_client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/api/catalog/categories/dung-cu")
    assert response.status_code == 200
    assert response.json()["icon"] == "🏀"
