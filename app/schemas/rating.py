from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional
from datetime import datetime
from .base import CamelModel, ResponseBase


class RatingCreate(CamelModel):
    product_id: str
    shop: str
    rating: int = Field(..., ge=1, le=5)  # 1-5 사이 정수
    client_id: Optional[str] = None

    @field_validator("rating", mode="before")
    @classmethod
    def coerce_integer(cls, value: Any) -> int:
        # bool은 int의 하위 타입이라 먼저 걸러낸다
        if isinstance(value, bool):
            raise ValueError("rating must be an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ValueError("rating must be an integer")


class RatingResponse(CamelModel):
    id: str
    shop: str
    product_id: str
    client_id: Optional[str] = None
    rating: int
    created_at: datetime


class RatingSubmitData(BaseModel):
    avg_rating: float


class RatingListData(BaseModel):
    reviews: List[RatingResponse]
    avg_rating: float


class RatingSubmitResponse(ResponseBase):
    data: RatingSubmitData


class RatingListResponse(ResponseBase):
    data: RatingListData
