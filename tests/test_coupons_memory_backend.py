from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.exception_handlers import register_exception_handlers
from app.deps import get_coupon_repository
from app.models.coupon import Coupon
from app.repositories.memory_coupon_repository import InMemoryCouponRepository, InMemoryCouponStore
from app.routers.coupons import router as coupons_router
from tests.fixtures_data import MISSING_COUPON_ID, SUMMER_CREATE_PAYLOAD


def _build_client(store: InMemoryCouponStore) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(coupons_router)
    app.dependency_overrides[get_coupon_repository] = lambda: InMemoryCouponRepository(store)
    return TestClient(app)


def test_memory_backend_lists_pre_seeded_coupons_in_order():
    store = InMemoryCouponStore(
        [
            Coupon(name="10OFF", percent=10, is_active=True),
            Coupon(name="20OFF", percent=20, is_active=False),
        ]
    )
    client = _build_client(store)

    response = client.get("/api/coupons")

    assert response.status_code == 200
    result = response.json()["result"]
    assert [(c["id"], c["name"]) for c in result] == [(1, "10OFF"), (2, "20OFF")]


def test_memory_backend_full_lifecycle():
    store = InMemoryCouponStore()
    client = _build_client(store)

    created = client.post("/api/coupons", json=SUMMER_CREATE_PAYLOAD)
    assert created.status_code == 201
    coupon_id = created.json()["result"]["id"]
    assert created.headers["location"].endswith(f"/api/coupons/{coupon_id}")

    duplicate = client.post("/api/coupons", json={"name": "summer", "percent": 5})
    assert duplicate.status_code == 400
    assert len(store.rows()) == 1

    updated = client.put(
        "/api/coupons",
        json={"id": coupon_id, "name": "SUMMER", "percent": 30, "isActive": True},
    )
    assert updated.status_code == 200
    assert updated.json()["result"]["percent"] == 30
    assert updated.json()["result"]["lastUpdated"] is not None

    missing = client.put(
        "/api/coupons",
        json={"id": MISSING_COUPON_ID, "name": "GHOST", "percent": 30, "isActive": True},
    )
    assert missing.status_code == 404

    deleted = client.delete(f"/api/coupons/{coupon_id}")
    assert deleted.status_code == 204
    assert client.get(f"/api/coupons/{coupon_id}").status_code == 404
    assert store.rows() == []
