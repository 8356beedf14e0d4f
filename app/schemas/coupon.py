from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Ids are stored as 32-bit integers.
COUPON_ID_MIN = -(2**31)
COUPON_ID_MAX = 2**31 - 1


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CouponCreateRequest(CamelModel):
    # Field constraints are checked by app.services.coupon_validation so the
    # handler can answer with the envelope instead of a framework error.
    name: Optional[str] = None
    percent: Optional[int] = None


class CouponUpdateRequest(CamelModel):
    id: Optional[int] = Field(default=None, le=COUPON_ID_MAX)
    name: Optional[str] = None
    percent: Optional[int] = None
    is_active: bool = False


class CouponResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    name: str
    percent: int
    is_active: bool
    created: Optional[datetime] = None


class CouponOut(CouponResponse):
    last_updated: Optional[datetime] = None
