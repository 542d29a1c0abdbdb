"""
Top-level router for version 1 of the API.

Aggregates the domain routers under a unified prefix.
"""

from fastapi import APIRouter

from .endpoints import auth, employees, info

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(employees.router, prefix="/employees", tags=["employees"])
router.include_router(info.router, prefix="/info", tags=["info"])
