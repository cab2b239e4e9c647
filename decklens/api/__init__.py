from decklens.api.analyze import router as analyze_router
from decklens.api.health import router as health_router

__all__ = [
    "analyze_router",
    "health_router",
]
