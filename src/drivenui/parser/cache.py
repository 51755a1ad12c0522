"""In-memory cache of parsed documents keyed by the markup they came from."""

from ..core.cache import LRUCache, Stats
from ..core.hash import hash_fields
from ..models.document import Document


def document_key(
    microapp_markup: str,
    styles_markup: str,
    queries_markup: str,
    screens: list[tuple[str, str]],
) -> str:
    """Stable key over every parse input (screen order matters)."""
    screen_fields = [part for name, markup in screens for part in (name, markup)]
    return hash_fields(microapp_markup, styles_markup, queries_markup, *screen_fields)


def _detached(document: Document) -> Document:
    # Style tables are the only dicts in a document; sequences are tuples
    return document.model_copy(update={"styles": document.styles.model_copy(deep=True)})


class DocumentCache:
    """
    Type-safe LRU cache for parsed documents.

    Screens, queries and component trees are immutable and shared between
    hits. Each caller gets its own copy of the style tables, so editing one
    never reaches the cached entry.
    """

    def __init__(self, max_size: int = 32, ttl_seconds: int = 3600) -> None:
        self._cache: LRUCache[Document] = LRUCache(max_size=max_size, ttl_seconds=ttl_seconds)

    def get(self, key: str) -> Document | None:
        document = self._cache.get(key)
        return _detached(document) if document is not None else None

    def set(self, key: str, document: Document) -> None:
        self._cache.purge_expired()
        self._cache.set(key, _detached(document))

    def clear(self) -> None:
        self._cache.clear()

    @property
    def stats(self) -> Stats:
        return self._cache.stats

    def __len__(self) -> int:
        return len(self._cache)


__all__ = ["DocumentCache", "document_key"]
