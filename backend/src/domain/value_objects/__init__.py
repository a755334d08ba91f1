"""Value Objects - Immutable objects defined by their attributes"""

from .slug import Slug, MAX_SLUG_LENGTH
__all__ = [
    "Slug",
    "MAX_SLUG_LENGTH",
]
