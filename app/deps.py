# app/deps.py
from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import COUPON_STORAGE_BACKEND
from app.core.database import get_db
from app.repositories.base import CouponRepository
from app.repositories.memory_coupon_repository import InMemoryCouponRepository, memory_store
from app.repositories.sql_coupon_repository import SqlCouponRepository
from app.services.coupon_service import CouponService

logger = logging.getLogger("app.coupons")


def get_coupon_repository(db: Session = Depends(get_db)) -> CouponRepository:
    """Repository bound to the configured storage backend for this request."""
    if COUPON_STORAGE_BACKEND == "memory":
        return InMemoryCouponRepository(memory_store)
    return SqlCouponRepository(db)


def get_coupon_service(
    repository: CouponRepository = Depends(get_coupon_repository),
) -> CouponService:
    return CouponService(repository, logger=logger)
