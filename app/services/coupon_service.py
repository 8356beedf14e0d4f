from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from app.core.errors import CouponNameConflictError, CouponNotFoundError, CouponValidationError
from app.repositories.base import CouponRepository
from app.schemas.coupon import CouponCreateRequest, CouponOut, CouponResponse, CouponUpdateRequest
from app.services.coupon_mapper import (
    apply_update_request,
    coupon_from_create_request,
    coupon_to_out,
    coupon_to_response,
)
from app.services.coupon_validation import validate_create, validate_update


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CouponService:
    def __init__(
        self,
        repository: CouponRepository,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._logger = logger or logging.getLogger(__name__)
        self._clock = clock

    def list_coupons(self) -> List[CouponOut]:
        self._logger.info("Looking for all coupons.")
        coupons = self._repository.get_all()
        self._logger.info("%s coupons were retrieved.", len(coupons))
        return [coupon_to_out(coupon) for coupon in coupons]

    def get_coupon(self, coupon_id: int) -> CouponOut:
        self._logger.info("Looking for coupon with identifier '%s'.", coupon_id, extra={"coupon_id": coupon_id})
        coupon = self._repository.get_by_id(coupon_id)
        if coupon is None:
            message = f"Coupon with identifier '{coupon_id}' not found."
            self._logger.warning(message, extra={"coupon_id": coupon_id})
            raise CouponNotFoundError(message)

        self._logger.info("Coupon with identifier '%s' has been retrieved.", coupon_id, extra={"coupon_id": coupon_id})
        return coupon_to_out(coupon)

    def create_coupon(self, request: CouponCreateRequest) -> CouponResponse:
        self._logger.info("Validating coupon data.")
        result = validate_create(request)
        if not result.is_valid:
            self._logger.warning("Validation coupon failed: %s", result.first_message())
            raise CouponValidationError(result.first_message())

        duplicate_message = f"The coupon with the name '{request.name}' already exists"
        if self._repository.get_by_name(request.name) is not None:
            self._logger.warning("Validation coupon failed: %s", duplicate_message)
            raise CouponNameConflictError(duplicate_message)

        self._logger.info("Creating new coupon.")
        coupon = coupon_from_create_request(request)
        coupon.created = self._clock()
        self._repository.create(coupon)
        try:
            self._repository.persist()
        except CouponNameConflictError as exc:
            self._logger.warning("Validation coupon failed: %s", duplicate_message)
            raise CouponNameConflictError(duplicate_message) from exc

        self._logger.info("Coupon has been created.", extra={"coupon_id": coupon.id})
        return coupon_to_response(coupon)

    def update_coupon(self, request: CouponUpdateRequest) -> CouponOut:
        self._logger.info("Validating coupon data.")
        result = validate_update(request)
        if not result.is_valid:
            self._logger.warning("Validation coupon failed: %s", result.first_message())
            raise CouponValidationError(result.first_message())

        # TODO: reject names already taken by a different coupon before persisting;
        # today only the storage unique index catches it.
        coupon = self._repository.get_by_id(request.id)
        if coupon is None:
            message = f"Coupon with identifier '{request.id}' not found."
            self._logger.warning(message, extra={"coupon_id": request.id})
            raise CouponNotFoundError(message)

        self._logger.info("Updating coupon.", extra={"coupon_id": request.id})
        apply_update_request(coupon, request)
        coupon.last_updated = self._clock()
        self._repository.update(coupon)
        try:
            self._repository.persist()
        except CouponNameConflictError as exc:
            message = f"The coupon with the name '{request.name}' already exists"
            self._logger.warning("Update coupon failed: %s", message, extra={"coupon_id": request.id})
            raise CouponNameConflictError(message) from exc
        except CouponNotFoundError as exc:
            message = f"Coupon with identifier '{request.id}' not found."
            self._logger.warning(message, extra={"coupon_id": request.id})
            raise CouponNotFoundError(message) from exc

        self._logger.info("Coupon has been updated.", extra={"coupon_id": request.id})
        return coupon_to_out(coupon)

    def delete_coupon(self, coupon_id: int) -> None:
        self._logger.info("Looking for coupon with identifier '%s'.", coupon_id, extra={"coupon_id": coupon_id})
        coupon = self._repository.get_by_id(coupon_id)
        if coupon is None:
            message = f"The coupon with identifier '{coupon_id}' does not exist"
            self._logger.warning("Validation coupon failed: %s", message, extra={"coupon_id": coupon_id})
            raise CouponNotFoundError(message)

        self._logger.info("Deleting coupon with identifier '%s'.", coupon_id, extra={"coupon_id": coupon_id})
        self._repository.remove(coupon)
        self._repository.persist()
        self._logger.info("Coupon with identifier '%s' has been deleted.", coupon_id, extra={"coupon_id": coupon_id})
