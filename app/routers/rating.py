from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import ReviewAppError
from app.database import get_db
from app.dependencies import get_rating_service
from app.schemas.base import ResponseBase
from app.schemas.rating import RatingResponse, RatingSubmitResponse, RatingListResponse
from app.services.rating.rating_service import RatingService
from app.utils.payload import is_json_request, read_payload, parse_rating_submission, require_product_query
from app.utils.responses import return_json, error_from_exception
from typing import Optional
import logging

router = APIRouter(
    prefix="/rating",
    tags=["rating"]
)
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {400: {"model": ResponseBase}, 500: {"model": ResponseBase}}

@router.post("", response_model=RatingSubmitResponse, responses=ERROR_RESPONSES)
async def submit_rating(
    request: Request,
    db: AsyncSession = Depends(get_db),
    rating_service: RatingService = Depends(get_rating_service)
):
    """상품 평점 제출 (JSON 또는 폼)"""
    try:
        data = await read_payload(request)
        rating_data = parse_rating_submission(
            data,
            require_client_id=rating_service.dedup_enabled,
            from_form=not is_json_request(request)
        )
        _, avg_rating = await rating_service.create_rating(rating_data, db)
        return return_json({
            "message": "Rating submitted successfully.",
            "data": {"avg_rating": avg_rating}
        })
    except ReviewAppError as e:
        return error_from_exception(e)

@router.get("", response_model=RatingListResponse, responses=ERROR_RESPONSES)
async def get_ratings(
    product_id: Optional[str] = Query(None, alias="productId"),
    shop: Optional[str] = Query(None),
    client_id: Optional[str] = Query(None, alias="client"),
    db: AsyncSession = Depends(get_db),
    rating_service: RatingService = Depends(get_rating_service)
):
    """상품 평점 목록과 평균 조회"""
    try:
        product_id, shop = require_product_query(product_id, shop)
        ratings, avg_rating = await rating_service.get_product_ratings(
            product_id, shop, db, client_id=client_id
        )
        return return_json({
            "data": {
                "reviews": [RatingResponse.model_validate(r).to_api() for r in ratings],
                "avg_rating": avg_rating
            }
        })
    except ReviewAppError as e:
        return error_from_exception(e)
