"""API routes."""

from fastapi import APIRouter

from app.api.routes import auth, changes, health, registrations, setup, teams, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(setup.router, prefix="/setup", tags=["setup"])
router.include_router(registrations.router, prefix="/registrations", tags=["registrations"])
router.include_router(teams.router, prefix="/teams", tags=["teams"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(changes.router, tags=["changes"])
