from typing import Iterable, List, Optional

from fastapi import Response


class CacheableMetadata:
    """Метаданные кэширования ответа: контексты вариативности и теги инвалидации"""

    def __init__(
        self,
        contexts: Optional[Iterable[str]] = None,
        tags: Optional[Iterable[str]] = None
    ):
        self.contexts: List[str] = []
        self.tags: List[str] = []
        self.add_cache_contexts(contexts or [])
        self.add_cache_tags(tags or [])

    def add_cache_contexts(self, contexts: Iterable[str]) -> "CacheableMetadata":
        for context in contexts:
            if context not in self.contexts:
                self.contexts.append(context)
        return self

    def add_cache_tags(self, tags: Iterable[str]) -> "CacheableMetadata":
        for tag in tags:
            if tag not in self.tags:
                self.tags.append(tag)
        return self

    def apply_to(self, response: Response) -> Response:
        """Запись метаданных в заголовки ответа"""
        if self.contexts:
            response.headers["X-Cache-Contexts"] = " ".join(sorted(self.contexts))
            # user.* контексты зависят от предъявленного токена
            if any(c.startswith("user") for c in self.contexts):
                response.headers["Vary"] = "Authorization"
        if self.tags:
            response.headers["X-Cache-Tags"] = " ".join(sorted(self.tags))
        return response
