"""Star (bookmark) use cases."""

from .list_starred import ListStarredDocumentsUseCase, ListStarredWikisUseCase
from .star_results import StarStatusResult, ToggleStarResult
from .toggle_star import GetStarStatusUseCase, ToggleStarUseCase

__all__ = [
    "GetStarStatusUseCase",
    "ListStarredDocumentsUseCase",
    "ListStarredWikisUseCase",
    "StarStatusResult",
    "ToggleStarResult",
    "ToggleStarUseCase",
]
