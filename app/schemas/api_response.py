from typing import Any, List, Sequence

from fastapi.encoders import jsonable_encoder
from pydantic import Field

from app.schemas.coupon import CamelModel


class ApiResponse(CamelModel):
    """Uniform wrapper for every coupon endpoint payload."""

    is_success: bool = False
    result: Any = None
    status_code: int
    error_messages: List[str] = Field(default_factory=list)

    @classmethod
    def success(cls, result: Any, status_code: int = 200) -> "ApiResponse":
        return cls(is_success=True, result=result, status_code=status_code)

    @classmethod
    def failure(cls, status_code: int, messages: Sequence[str]) -> "ApiResponse":
        return cls(is_success=False, result=None, status_code=status_code, error_messages=list(messages))

    def to_content(self) -> dict:
        content = self.model_dump(mode="json", by_alias=True, exclude={"result"})
        content["result"] = jsonable_encoder(self.result, by_alias=True)
        return content
