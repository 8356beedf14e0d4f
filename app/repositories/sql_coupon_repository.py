from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core.errors import CouponNameConflictError, CouponNotFoundError
from app.models.coupon import Coupon
from app.repositories.base import CouponRepository

logger = logging.getLogger(__name__)


class SqlCouponRepository(CouponRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get_all(self) -> List[Coupon]:
        return self._db.query(Coupon).order_by(Coupon.id.asc()).all()

    def get_by_id(self, coupon_id: int) -> Optional[Coupon]:
        return self._db.query(Coupon).filter(Coupon.id == coupon_id).first()

    def get_by_name(self, name: str) -> Optional[Coupon]:
        return (
            self._db.query(Coupon)
            .filter(func.lower(Coupon.name) == name.lower())
            .first()
        )

    def create(self, coupon: Coupon) -> None:
        self._db.add(coupon)

    def update(self, coupon: Coupon) -> None:
        self._db.add(coupon)

    def remove(self, coupon: Coupon) -> None:
        self._db.delete(coupon)

    def persist(self) -> None:
        try:
            self._db.commit()
        except IntegrityError as exc:
            self._db.rollback()
            logger.warning("coupon persist rejected by storage: %s", exc.orig)
            raise CouponNameConflictError("Coupon name already exists") from exc
        except StaleDataError as exc:
            self._db.rollback()
            logger.warning("coupon persist matched no row: %s", exc)
            raise CouponNotFoundError("Coupon no longer exists") from exc
