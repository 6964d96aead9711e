"""Application service used by front-end bridges."""

from .service import TodoService

__all__ = ["TodoService"]
