"""API routers for the site ratings backend."""

from . import contact
from . import health
from . import ratings

__all__ = [
    "contact",
    "health",
    "ratings",
]
