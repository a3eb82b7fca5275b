from fastapi import APIRouter

from prompt_builder.api.routes import builder, generation, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(generation.router, tags=["generation"])
api_router.include_router(builder.router, tags=["builder"])
