"""FastAPI routers package."""

from . import auth, enquiries, flights, health, hotels, metrics, packages, visas

ALL_ROUTERS = [
    health.router,
    metrics.router,
    auth.router,
    packages.router,
    packages.public_router,
    hotels.router,
    visas.router,
    flights.router,
    flights.public_router,
    enquiries.router,
    enquiries.stats_router,
]

__all__ = ["ALL_ROUTERS"]
