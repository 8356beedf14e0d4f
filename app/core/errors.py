from __future__ import annotations

from typing import Sequence


class CouponServiceError(Exception):
    """Base for the errors the coupon handlers turn into an error envelope."""

    status_code = 400

    def __init__(self, messages: str | Sequence[str]) -> None:
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class CouponValidationError(CouponServiceError):
    status_code = 400


class CouponNotFoundError(CouponServiceError):
    status_code = 404


class CouponNameConflictError(CouponServiceError):
    status_code = 400
