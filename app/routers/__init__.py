# Routers package
from . import appointments_router

__all__ = [
    "appointments_router",
]
