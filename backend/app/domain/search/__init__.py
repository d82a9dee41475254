"""Search domain exports."""

from .corpus import FileSearchDataStorage, RedisSearchDataStorage, SearchDataProvider, SearchDataUpdater
from .engine import SearchEngine
from .service import UserIndex

__all__ = [
	"FileSearchDataStorage",
	"RedisSearchDataStorage",
	"SearchDataProvider",
	"SearchDataUpdater",
	"SearchEngine",
	"UserIndex",
]
