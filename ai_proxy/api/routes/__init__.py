"""HTTP route modules."""

from fastapi import APIRouter

from ai_proxy.api.routes import chat, health

router = APIRouter()

router.include_router(health.router)
router.include_router(chat.router)
