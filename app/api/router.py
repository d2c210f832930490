"""
Mind Compare — Main API Router

Aggregates all sub-routers under a single prefix so that ``app.main``
can mount the entire API surface with one ``include_router`` call.
"""

from fastapi import APIRouter

from app.api import compare

router = APIRouter()

router.include_router(compare.router, prefix="/compare", tags=["Compare"])
