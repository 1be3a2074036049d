"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Unlike a router-wide auth dependency, authentication here is
declared per route: post reads are public while writes on the same
router need a session, so each handler asks for get_current_user
when it needs one.
"""

from fastapi import APIRouter

from inkwell.api.auth import router as auth_router
from inkwell.api.health import router as health_router
from inkwell.api.posts import router as posts_router
from inkwell.api.profile import router as profile_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(posts_router, tags=["posts"])
api_router.include_router(profile_router, tags=["profile"])
