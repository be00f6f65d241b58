from diary.api.http.health import router as health_router
from diary.api.http.auth import router as auth_router
from diary.api.http.entries import router as entries_router
from diary.api.http.export import router as export_router

__all__ = [
    "health_router",
    "auth_router",
    "entries_router",
    "export_router"
]
