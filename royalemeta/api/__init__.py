from royalemeta.api.health import router as health_router
from royalemeta.api.meta import router as meta_router
from royalemeta.api.players import router as players_router

__all__ = [
    "health_router",
    "meta_router",
    "players_router",
]
