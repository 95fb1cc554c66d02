from .repository import IRepository
from .search_result import SearchResult, stream_from_list

__all__ = [
    "IRepository",
    "SearchResult",
    "stream_from_list",
]
