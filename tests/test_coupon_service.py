import logging
from datetime import datetime, timezone

import pytest

from app.core.errors import CouponNameConflictError, CouponNotFoundError, CouponValidationError
from app.models.coupon import Coupon
from app.repositories.memory_coupon_repository import InMemoryCouponRepository, InMemoryCouponStore
from app.schemas.coupon import CouponCreateRequest, CouponUpdateRequest
from app.services.coupon_service import CouponService

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def _build_service(store=None):
    handler = _ListHandler()
    logger = logging.getLogger("tests.coupon_service")
    logger.handlers = [handler]
    logger.setLevel(logging.INFO)
    logger.propagate = False
    store = store or InMemoryCouponStore()
    service = CouponService(InMemoryCouponRepository(store), logger=logger, clock=lambda: FIXED_NOW)
    return service, store, handler


def test_create_stamps_created_and_logs_through_injected_logger():
    service, store, handler = _build_service()

    response = service.create_coupon(CouponCreateRequest(name="SUMMER", percent=20))

    assert response.id == 1
    assert response.created == FIXED_NOW
    assert response.is_active is False
    assert store.rows()[0].created == FIXED_NOW
    messages = [record.getMessage() for record in handler.records]
    assert "Creating new coupon." in messages
    assert "Coupon has been created." in messages


def test_create_validation_failure_raises_with_first_message_only():
    service, store, handler = _build_service()

    with pytest.raises(CouponValidationError) as exc:
        service.create_coupon(CouponCreateRequest(name="", percent=0))

    assert exc.value.messages == ["'Name' must not be empty."]
    assert exc.value.status_code == 400
    assert store.rows() == []
    assert any(record.levelno == logging.WARNING for record in handler.records)


def test_create_duplicate_name_raises_conflict():
    store = InMemoryCouponStore([Coupon(name="Summer", percent=10, is_active=True)])
    service, _store, _handler = _build_service(store)

    with pytest.raises(CouponNameConflictError) as exc:
        service.create_coupon(CouponCreateRequest(name="SUMMER", percent=20))

    assert exc.value.messages == ["The coupon with the name 'SUMMER' already exists"]
    assert exc.value.status_code == 400
    assert len(store.rows()) == 1


def test_update_keeps_id_and_created_and_stamps_last_updated():
    created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    store = InMemoryCouponStore([Coupon(name="Summer", percent=10, is_active=False, created=created_at)])
    service, _store, _handler = _build_service(store)

    result = service.update_coupon(CouponUpdateRequest(id=1, name="Summer", percent=40, is_active=True))

    assert result.id == 1
    assert result.created == created_at
    assert result.last_updated == FIXED_NOW
    assert (result.percent, result.is_active) == (40, True)


def test_update_missing_coupon_raises_not_found():
    service, store, _handler = _build_service()

    with pytest.raises(CouponNotFoundError) as exc:
        service.update_coupon(CouponUpdateRequest(id=999999, name="GHOST", percent=10))

    assert exc.value.status_code == 404
    assert exc.value.messages == ["Coupon with identifier '999999' not found."]
    assert store.rows() == []


def test_update_to_existing_name_is_rejected_at_persist():
    store = InMemoryCouponStore(
        [
            Coupon(name="Summer", percent=10, is_active=False),
            Coupon(name="Winter", percent=20, is_active=False),
        ]
    )
    service, _store, _handler = _build_service(store)

    with pytest.raises(CouponNameConflictError):
        service.update_coupon(CouponUpdateRequest(id=1, name="WINTER", percent=10))

    assert [row.name for row in store.rows()] == ["Summer", "Winter"]


def test_delete_removes_coupon_and_missing_id_raises():
    store = InMemoryCouponStore([Coupon(name="Summer", percent=10, is_active=False)])
    service, _store, _handler = _build_service(store)

    service.delete_coupon(1)

    assert store.rows() == []
    with pytest.raises(CouponNotFoundError) as exc:
        service.delete_coupon(1)
    assert exc.value.messages == ["The coupon with identifier '1' does not exist"]


def test_list_and_get_return_entity_shape():
    store = InMemoryCouponStore([Coupon(name="Summer", percent=10, is_active=True)])
    service, _store, _handler = _build_service(store)

    listed = service.list_coupons()
    fetched = service.get_coupon(1)

    assert [coupon.name for coupon in listed] == ["Summer"]
    assert fetched.last_updated is None
    with pytest.raises(CouponNotFoundError):
        service.get_coupon(2)


class _RemovedAfterLookupRepository(InMemoryCouponRepository):
    """Deletes the row through a second repository right after it is read."""

    def get_by_id(self, coupon_id):
        coupon = super().get_by_id(coupon_id)
        if coupon is not None:
            other = InMemoryCouponRepository(self._store)
            other.remove(coupon)
            other.persist()
        return coupon


def test_update_of_coupon_deleted_concurrently_raises_not_found():
    store = InMemoryCouponStore([Coupon(name="SUMMER", percent=20, is_active=False)])
    service = CouponService(_RemovedAfterLookupRepository(store), clock=lambda: FIXED_NOW)

    with pytest.raises(CouponNotFoundError) as exc:
        service.update_coupon(CouponUpdateRequest(id=1, name="SUMMER", percent=30, is_active=True))

    assert exc.value.messages == ["Coupon with identifier '1' not found."]
    assert exc.value.status_code == 404
    assert store.rows() == []
