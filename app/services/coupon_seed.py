from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Tuple

from app.models.coupon import Coupon
from app.repositories.base import CouponRepository
from app.schemas.coupon import CouponCreateRequest
from app.services.coupon_validation import validate_create

logger = logging.getLogger(__name__)
SEED_PREFIX = "[COUPON_SEED]"

# (name, percent, is_active)
DEMO_COUPONS: Tuple[Tuple[str, int, bool], ...] = (
    ("10OFF", 10, True),
    ("20OFF", 20, False),
)


def parse_coupon_spec(raw: str) -> Tuple[str, int, bool]:
    """Parse `NAME:PERCENT[:active]` and check it against the create rules."""
    parts = raw.split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid coupon '{raw}', expected NAME:PERCENT[:active]")
    try:
        percent = int(parts[1])
    except ValueError as exc:
        raise ValueError(f"Invalid percent in '{raw}'") from exc

    request = CouponCreateRequest(name=parts[0].strip(), percent=percent)
    result = validate_create(request)
    if not result.is_valid:
        raise ValueError(result.first_message())

    is_active = len(parts) == 3 and parts[2].strip().lower() in {"1", "true", "yes", "active"}
    return request.name, request.percent, is_active


def seed_coupons(
    repository: CouponRepository,
    coupons: Iterable[Tuple[str, int, bool]] = DEMO_COUPONS,
) -> List[Coupon]:
    """Insert the given coupons, skipping names that already exist."""
    created: List[Coupon] = []
    for name, percent, is_active in coupons:
        if repository.get_by_name(name) is not None:
            logger.info("%s exists name=%s", SEED_PREFIX, name)
            continue
        coupon = Coupon(
            name=name,
            percent=percent,
            is_active=is_active,
            created=datetime.now(timezone.utc),
        )
        repository.create(coupon)
        created.append(coupon)

    if created:
        repository.persist()
    logger.info("%s created=%s", SEED_PREFIX, len(created))
    return created
