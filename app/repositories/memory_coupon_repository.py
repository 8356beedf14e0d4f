from __future__ import annotations

from threading import Lock
from typing import Iterable, List, Optional, Tuple

from app.core.errors import CouponNameConflictError, CouponNotFoundError
from app.models.coupon import Coupon
from app.repositories.base import CouponRepository


def _clone(coupon: Coupon) -> Coupon:
    return Coupon(
        id=coupon.id,
        name=coupon.name,
        percent=coupon.percent,
        is_active=coupon.is_active,
        created=coupon.created,
        last_updated=coupon.last_updated,
    )


class InMemoryCouponStore:
    """Ordered, process-wide stand-in for the coupons table."""

    def __init__(self, coupons: Iterable[Coupon] = ()) -> None:
        self._lock = Lock()
        self._rows: List[Coupon] = []
        self._next_id = 1
        for coupon in coupons:
            self._append(_clone(coupon))

    def _append(self, coupon: Coupon) -> None:
        if coupon.id is None:
            coupon.id = self._next_id
        self._next_id = max(self._next_id, coupon.id + 1)
        self._rows.append(coupon)

    def rows(self) -> List[Coupon]:
        with self._lock:
            return [_clone(row) for row in self._rows]

    def find(self, predicate) -> Optional[Coupon]:
        with self._lock:
            for row in self._rows:
                if predicate(row):
                    return _clone(row)
        return None

    def apply(self, changes: List[Tuple[str, Coupon]]) -> None:
        with self._lock:
            working = [_clone(row) for row in self._rows]
            next_id = self._next_id
            created: List[Tuple[Coupon, int]] = []

            for action, coupon in changes:
                if action == "create":
                    row = _clone(coupon)
                    row.id = next_id
                    next_id += 1
                    working.append(row)
                    created.append((coupon, row.id))
                elif action == "update":
                    if not any(row.id == coupon.id for row in working):
                        raise CouponNotFoundError("Coupon no longer exists")
                    working = [_clone(coupon) if row.id == coupon.id else row for row in working]
                elif action == "remove":
                    working = [row for row in working if row.id != coupon.id]

            seen = set()
            for row in working:
                key = (row.name or "").lower()
                if key in seen:
                    raise CouponNameConflictError("Coupon name already exists")
                seen.add(key)

            self._rows = working
            self._next_id = next_id
            for coupon, new_id in created:
                coupon.id = new_id

    def clear(self) -> None:
        with self._lock:
            self._rows = []
            self._next_id = 1


class InMemoryCouponRepository(CouponRepository):
    def __init__(self, store: InMemoryCouponStore) -> None:
        self._store = store
        self._pending: List[Tuple[str, Coupon]] = []

    def get_all(self) -> List[Coupon]:
        return self._store.rows()

    def get_by_id(self, coupon_id: int) -> Optional[Coupon]:
        return self._store.find(lambda row: row.id == coupon_id)

    def get_by_name(self, name: str) -> Optional[Coupon]:
        lowered = name.lower()
        return self._store.find(lambda row: (row.name or "").lower() == lowered)

    def create(self, coupon: Coupon) -> None:
        self._pending.append(("create", coupon))

    def update(self, coupon: Coupon) -> None:
        self._pending.append(("update", coupon))

    def remove(self, coupon: Coupon) -> None:
        self._pending.append(("remove", coupon))

    def persist(self) -> None:
        changes, self._pending = self._pending, []
        self._store.apply(changes)


memory_store = InMemoryCouponStore()
