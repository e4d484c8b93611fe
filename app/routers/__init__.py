from .rating import router as rating_router
from .review import router as review_router

__all__ = [
    'rating_router',
    'review_router'
]
