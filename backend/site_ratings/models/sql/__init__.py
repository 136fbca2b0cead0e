"""SQL models module."""

from .database import Base, build_engine, build_session_factory, get_engine, get_session_factory
from .rating import RatingRecord

__all__ = [
    "Base",
    "RatingRecord",
    "build_engine",
    "build_session_factory",
    "get_engine",
    "get_session_factory",
]
