from fastapi import APIRouter

from app.api.routes import meta, weather

api_router = APIRouter()
api_router.include_router(meta.router, tags=["meta"])
api_router.include_router(weather.router, tags=["weather"])
