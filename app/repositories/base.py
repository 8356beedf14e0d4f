from __future__ import annotations

from typing import List, Optional, Protocol

from app.models.coupon import Coupon


class CouponRepository(Protocol):
    """Storage facade used by the coupon handlers.

    Reads execute immediately. ``create``, ``update`` and ``remove`` only
    stage a change; nothing is written until ``persist`` is called, and ids
    of new coupons are assigned there. ``persist`` raises
    ``CouponNameConflictError`` when the staged changes would leave two
    coupons with the same case-insensitive name.
    """

    def get_all(self) -> List[Coupon]:
        ...

    def get_by_id(self, coupon_id: int) -> Optional[Coupon]:
        ...

    def get_by_name(self, name: str) -> Optional[Coupon]:
        ...

    def create(self, coupon: Coupon) -> None:
        ...

    def update(self, coupon: Coupon) -> None:
        ...

    def remove(self, coupon: Coupon) -> None:
        ...

    def persist(self) -> None:
        ...
