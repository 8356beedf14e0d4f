from __future__ import annotations

from app.models.coupon import Coupon
from app.schemas.coupon import CouponCreateRequest, CouponOut, CouponResponse, CouponUpdateRequest


def coupon_from_create_request(request: CouponCreateRequest) -> Coupon:
    return Coupon(name=request.name, percent=request.percent, is_active=False)


def apply_update_request(coupon: Coupon, request: CouponUpdateRequest) -> Coupon:
    coupon.name = request.name
    coupon.percent = request.percent
    coupon.is_active = request.is_active
    return coupon


def coupon_to_response(coupon: Coupon) -> CouponResponse:
    return CouponResponse(
        id=coupon.id,
        name=coupon.name,
        percent=coupon.percent,
        is_active=bool(coupon.is_active),
        created=coupon.created,
    )


def coupon_to_out(coupon: Coupon) -> CouponOut:
    return CouponOut(
        id=coupon.id,
        name=coupon.name,
        percent=coupon.percent,
        is_active=bool(coupon.is_active),
        created=coupon.created,
        last_updated=coupon.last_updated,
    )
