"""Field rules for coupon request payloads.

The checks never touch storage. Each validator returns every violation in
rule order; callers decide how many of them to expose.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from app.schemas.coupon import CouponCreateRequest, CouponUpdateRequest

PERCENT_MIN = 1
PERCENT_MAX = 100
NAME_MAX_LENGTH = 100


@dataclass(frozen=True)
class ValidationFailure:
    field: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ValidationResult:
    errors: List[ValidationFailure] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def first_message(self) -> Optional[str]:
        return self.errors[0].message if self.errors else None


def _check_name(name: Optional[str]) -> List[ValidationFailure]:
    if name is None or not name.strip():
        return [ValidationFailure("name", "'Name' must not be empty.")]
    if len(name) > NAME_MAX_LENGTH:
        return [
            ValidationFailure(
                "name",
                f"The length of 'Name' must be {NAME_MAX_LENGTH} characters or fewer. You entered {len(name)} characters.",
            )
        ]
    return []


def _check_percent(percent: Optional[int]) -> List[ValidationFailure]:
    if percent is None:
        return [ValidationFailure("percent", "'Percent' must not be empty.")]
    if not PERCENT_MIN <= percent <= PERCENT_MAX:
        return [
            ValidationFailure(
                "percent",
                f"'Percent' must be between {PERCENT_MIN} and {PERCENT_MAX}. You entered {percent}.",
            )
        ]
    return []


def _check_id(coupon_id: Optional[int]) -> List[ValidationFailure]:
    failures: List[ValidationFailure] = []
    # 0 is the "empty" id, same as a missing one.
    if not coupon_id:
        failures.append(ValidationFailure("id", "'Id' must not be empty."))
    if coupon_id is None or coupon_id <= 0:
        failures.append(ValidationFailure("id", "'Id' must be greater than '0'."))
    return failures


def validate_create(request: CouponCreateRequest) -> ValidationResult:
    return ValidationResult(errors=_check_name(request.name) + _check_percent(request.percent))


def validate_update(request: CouponUpdateRequest) -> ValidationResult:
    return ValidationResult(
        errors=_check_id(request.id) + _check_name(request.name) + _check_percent(request.percent)
    )
