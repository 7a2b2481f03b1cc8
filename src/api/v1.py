"""Centralized v1 API router: all module routers are included here."""

from fastapi import APIRouter

from src.modules.post.router import router as post_router
from src.modules.tenancy.router import router as organization_router
from src.modules.user_admin.router import router as user_admin_router

v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(organization_router)
v1_router.include_router(post_router)
v1_router.include_router(user_admin_router)
