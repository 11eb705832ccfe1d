"""
Routers package initialization.
"""
from app.routers import eligibility
from app.routers import dashboard
from app.routers import citizens
from app.routers import geography
from app.routers import eca

__all__ = [
    "eligibility",
    "dashboard",
    "citizens",
    "geography",
    "eca",
]
