"""
Translation Service - pass-through to Google Translate v2 for meal text.

Translations are cached per (text, target language) in a TranslationCache
that lives as long as the process and is never evicted. Any failure falls
back to the original text, so a broken translation never hides a meal.
"""

import logging
from typing import Dict, List, Optional, Tuple

import httpx

from app.exceptions import ServiceValidationError

logger = logging.getLogger("dailymenu.translate")


class TranslationCache:
    def __init__(self):
        self._entries: Dict[Tuple[str, str], str] = {}

    def get(self, text: str, target_lang: str) -> Optional[str]:
        return self._entries.get((text, target_lang))

    def put(self, text: str, target_lang: str, translated: str) -> None:
        self._entries[(text, target_lang)] = translated

    def __len__(self) -> int:
        return len(self._entries)

    # truthy even when empty
    def __bool__(self) -> bool:
        return True


class TranslationService:
    def __init__(
        self,
        api_key: Optional[str],
        url: str,
        cache: TranslationCache,
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.url = url
        self.cache = cache
        self.client = client or httpx.Client(timeout=timeout)

    def translate(self, texts: List[str], target_lang: str, source_lang: str = "en") -> List[str]:
        """Translate texts, keeping order. Originals are returned for English,
        for the source language, and for anything the API failed on.

        Raises:
            ServiceValidationError: if no API key is configured
        """
        if not target_lang or target_lang in ("en", source_lang):
            return list(texts)
        if not self.api_key:
            raise ServiceValidationError(
                "Translation API key not configured", code="TRANSLATE_NOT_CONFIGURED"
            )

        results: List[Optional[str]] = [self.cache.get(t, target_lang) for t in texts]
        missing = [i for i, r in enumerate(results) if r is None]
        if not missing:
            return results

        fetched = self._fetch([texts[i] for i in missing], target_lang, source_lang)
        for position, index in enumerate(missing):
            if fetched is None:
                results[index] = texts[index]
                continue
            translated = fetched[position]
            self.cache.put(texts[index], target_lang, translated)
            results[index] = translated
        return results

    def _fetch(self, texts: List[str], target_lang: str, source_lang: str) -> Optional[List[str]]:
        payload = {"q": texts, "target": target_lang, "source": source_lang, "format": "text"}
        try:
            resp = self.client.post(self.url, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Translate request failed, using originals: %s", exc)
            return None
        if resp.status_code != 200:
            logger.warning("Translate API returned %d, using originals", resp.status_code)
            return None
        try:
            translations = [t["translatedText"] for t in resp.json()["data"]["translations"]]
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Unexpected translate response, using originals: %s", exc)
            return None
        if len(translations) != len(texts):
            logger.warning(
                "Translate API returned %d items for %d texts, using originals",
                len(translations),
                len(texts),
            )
            return None
        return translations
