from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import ReviewAppError, ValidationError
from app.database import get_db
from app.dependencies import get_typed_review_service
from app.schemas.base import ResponseBase
from app.schemas.typed_review import TypedReviewResponse, TypedReviewCreatedResponse, TypedReviewListResponse
from app.services.review.typed_review_service import TypedReviewService
from app.utils.payload import (
    INVALID_CONTENT_TYPE_MESSAGE,
    is_json_request,
    read_json_body,
    parse_typed_review_submission,
    require_product_query
)
from app.utils.responses import PUBLIC_READ_CORS_HEADERS, return_json, error_from_exception
from typing import Optional
import logging

router = APIRouter(
    prefix="/review",
    tags=["review"]
)
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {400: {"model": ResponseBase}, 500: {"model": ResponseBase}}

@router.post(
    "",
    response_model=TypedReviewCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES
)
async def submit_typed_review(
    request: Request,
    db: AsyncSession = Depends(get_db),
    review_service: TypedReviewService = Depends(get_typed_review_service)
):
    """텍스트 리뷰 작성 (JSON 전용)"""
    try:
        # 본문을 읽기 전에 Content-Type부터 확인
        if not is_json_request(request):
            raise ValidationError(INVALID_CONTENT_TYPE_MESSAGE)

        data = await read_json_body(request)
        review_data = parse_typed_review_submission(data)
        review = await review_service.create_review(review_data, db)
        return return_json(
            {"review": TypedReviewResponse.model_validate(review).to_api()},
            code=status.HTTP_201_CREATED
        )
    except ReviewAppError as e:
        return error_from_exception(e)

@router.get("", response_model=TypedReviewListResponse, responses=ERROR_RESPONSES)
async def get_typed_reviews(
    product_id: Optional[str] = Query(None, alias="productId"),
    shop: Optional[str] = Query(None),
    client_id: Optional[str] = Query(None, alias="client"),
    db: AsyncSession = Depends(get_db),
    review_service: TypedReviewService = Depends(get_typed_review_service)
):
    """상품 텍스트 리뷰 조회"""
    try:
        product_id, shop = require_product_query(product_id, shop)
        reviews = await review_service.get_product_reviews(
            product_id, shop, db, client_id=client_id
        )
        return return_json(
            {"reviews": [TypedReviewResponse.model_validate(r).to_api() for r in reviews]},
            headers=PUBLIC_READ_CORS_HEADERS
        )
    except ReviewAppError as e:
        return error_from_exception(e)
