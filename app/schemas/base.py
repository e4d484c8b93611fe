from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional


class ResponseBase(BaseModel):
    """기본 응답 스키마"""
    ok: bool
    message: Optional[str] = None


class CamelModel(BaseModel):
    """API 레코드 스키마. 필드는 camelCase로 직렬화된다"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    def to_api(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
