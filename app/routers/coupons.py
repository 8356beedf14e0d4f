from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status
from fastapi.responses import JSONResponse

from app.core.errors import CouponServiceError
from app.deps import get_coupon_service
from app.schemas.api_response import ApiResponse
from app.schemas.coupon import COUPON_ID_MAX, COUPON_ID_MIN, CouponCreateRequest, CouponUpdateRequest
from app.services.coupon_service import CouponService

router = APIRouter(prefix="/api/coupons", tags=["coupons"])

CouponId = Annotated[int, Path(ge=COUPON_ID_MIN, le=COUPON_ID_MAX)]


def _envelope(envelope: ApiResponse, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=envelope.status_code, content=envelope.to_content(), headers=headers)


def _error(exc: CouponServiceError) -> JSONResponse:
    return _envelope(ApiResponse.failure(exc.status_code, exc.messages))


@router.get("", name="get_coupons")
def list_coupons(service: CouponService = Depends(get_coupon_service)):
    coupons = service.list_coupons()
    return _envelope(ApiResponse.success(coupons, status.HTTP_200_OK))


@router.get("/{coupon_id}", name="get_coupon")
def get_coupon(coupon_id: CouponId, service: CouponService = Depends(get_coupon_service)):
    try:
        coupon = service.get_coupon(coupon_id)
    except CouponServiceError as exc:
        return _error(exc)
    return _envelope(ApiResponse.success(coupon, status.HTTP_200_OK))


@router.post("", name="create_coupon", status_code=status.HTTP_201_CREATED)
def create_coupon(
    payload: CouponCreateRequest,
    request: Request,
    service: CouponService = Depends(get_coupon_service),
):
    try:
        coupon = service.create_coupon(payload)
    except CouponServiceError as exc:
        return _error(exc)
    location = str(request.url_for("get_coupon", coupon_id=str(coupon.id)))
    return _envelope(
        ApiResponse.success(coupon, status.HTTP_201_CREATED),
        headers={"Location": location},
    )


@router.put("", name="update_coupon")
def update_coupon(payload: CouponUpdateRequest, service: CouponService = Depends(get_coupon_service)):
    try:
        coupon = service.update_coupon(payload)
    except CouponServiceError as exc:
        return _error(exc)
    return _envelope(ApiResponse.success(coupon, status.HTTP_200_OK))


@router.delete("/{coupon_id}", name="delete_coupon", status_code=status.HTTP_204_NO_CONTENT)
def delete_coupon(coupon_id: CouponId, service: CouponService = Depends(get_coupon_service)):
    try:
        service.delete_coupon(coupon_id)
    except CouponServiceError as exc:
        return _error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
