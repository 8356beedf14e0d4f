import pytest

from app.models.coupon import Coupon
from app.repositories.memory_coupon_repository import InMemoryCouponRepository, InMemoryCouponStore
from app.services.coupon_seed import DEMO_COUPONS, parse_coupon_spec, seed_coupons


def test_seed_creates_demo_coupons_on_empty_storage():
    store = InMemoryCouponStore()

    created = seed_coupons(InMemoryCouponRepository(store))

    assert len(created) == len(DEMO_COUPONS)
    rows = store.rows()
    assert [(row.name, row.percent, row.is_active) for row in rows] == list(DEMO_COUPONS)
    assert all(row.created is not None for row in rows)


def test_seed_skips_names_that_already_exist_case_insensitively():
    store = InMemoryCouponStore([Coupon(name="10off", percent=50, is_active=False)])

    created = seed_coupons(InMemoryCouponRepository(store))

    assert [coupon.name for coupon in created] == ["20OFF"]
    assert [row.name for row in store.rows()] == ["10off", "20OFF"]
    assert store.rows()[0].percent == 50


def test_seed_is_idempotent():
    store = InMemoryCouponStore()
    repository = InMemoryCouponRepository(store)

    seed_coupons(repository)
    second_run = seed_coupons(repository)

    assert second_run == []
    assert len(store.rows()) == len(DEMO_COUPONS)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("SPRING:15", ("SPRING", 15, False)),
        (" SPRING :15:active", ("SPRING", 15, True)),
        ("SPRING:100:no", ("SPRING", 100, False)),
    ],
)
def test_parse_coupon_spec_accepts_valid_entries(raw, expected):
    assert parse_coupon_spec(raw) == expected


@pytest.mark.parametrize(
    "raw,message",
    [
        ("SPRING", "Invalid coupon 'SPRING', expected NAME:PERCENT[:active]"),
        ("SPRING:abc", "Invalid percent in 'SPRING:abc'"),
        (":15", "'Name' must not be empty."),
        ("SPRING:0", "'Percent' must be between 1 and 100. You entered 0."),
        ("X" * 101 + ":10", "The length of 'Name' must be 100 characters or fewer. You entered 101 characters."),
    ],
)
def test_parse_coupon_spec_applies_create_rules(raw, message):
    with pytest.raises(ValueError) as exc:
        parse_coupon_spec(raw)

    assert str(exc.value) == message
