from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from dotenv import load_dotenv
import logging
from app.database import init_db
from app.routers import (
    rating_router,
    review_router
)
from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.exceptions import ReviewAppError
from app.utils.responses import error_from_exception, return_error_json

# .env 파일 로드
load_dotenv()

# 로깅 설정
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작/종료 시 실행되는 이벤트 핸들러"""
    try:
        await init_db()
        logger.info("Application startup completed")
        yield
    finally:
        logger.info("Application shutdown")

# FastAPI 앱 설정
app = FastAPI(
    title="Shop Reviews API",
    description="Product ratings and typed reviews for Shopify shops",
    version="1.0.0",
    lifespan=lifespan
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(ReviewAppError)
async def review_app_error_handler(request: Request, exc: ReviewAppError):
    return error_from_exception(exc)

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=True)
    return return_error_json("Internal server error.", status.HTTP_500_INTERNAL_SERVER_ERROR)

# 라우터 초기화 함수 정의
def init_routers(app: FastAPI):
    """라우터 초기화"""
    app.include_router(rating_router, prefix="/api")
    app.include_router(review_router, prefix="/api")

# 라우터 초기화 함수 호출
init_routers(app)

# 헬스체크 엔드포인트
@app.get("/health")
async def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,  # 개발 환경에서 자동 리로드 활성화
        reload_dirs=["app"]
    )
