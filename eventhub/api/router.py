"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter

from eventhub.api.routes import events, registrations


def build_api_router(prefix: str) -> APIRouter:
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(events.router)
    api_router.include_router(registrations.router)
    return api_router
