"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from app.api.v1.routes import auth, difficulty, segments

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(segments.router, prefix="/segments", tags=["Segments"])
api_router.include_router(difficulty.router, prefix="/difficulty", tags=["Difficulty"])
