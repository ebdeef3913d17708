"""
Character lookup: cache -> dictionary sources (in order) -> fallback table.

One CharacterResolver is built per process and handed to whoever needs it.
Records coming from a source are enriched and cached for the life of the
process; fallback table hits are returned as-is.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Sequence

from .enrich import (
    estimate_hsk_level,
    extract_tone,
    generate_example_words,
    translate_to_german,
)
from .errors import InputInvalid, SourceUnavailable
from .models import CharacterRecord, SourceEntry
from .sources import DictionarySource

logger = logging.getLogger(__name__)


def build_record(
    entry: SourceEntry,
    source: str,
    translate: Callable[[Optional[str]], Optional[str]] = translate_to_german,
) -> CharacterRecord:
    return CharacterRecord(
        character=entry.character,
        pinyin=entry.pinyin,
        tone=extract_tone(entry.pinyin),
        meaning_de=translate(entry.definition) or entry.definition,
        meaning_en=entry.definition,
        strokes=entry.strokes,
        hsk_level=estimate_hsk_level(entry.character),
        words=generate_example_words(entry.character),
        source=source,
    )


class CharacterResolver:
    def __init__(
        self,
        sources: Sequence[DictionarySource],
        fallback: Mapping[str, CharacterRecord],
        translate: Callable[[Optional[str]], Optional[str]] = translate_to_german,
    ) -> None:
        self.sources: List[DictionarySource] = list(sources)
        self.fallback = fallback
        self.translate = translate

        self._cache: Dict[str, CharacterRecord] = {}
        self._cache_lock = threading.Lock()
        # in-flight fetches only: character -> [lock, number of requests holding or waiting on it]
        self._key_locks: Dict[str, list] = {}

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    @property
    def in_flight(self) -> int:
        """Number of characters currently being fetched or waited on."""
        with self._cache_lock:
            return len(self._key_locks)

    def cached(self, character: str) -> Optional[CharacterRecord]:
        with self._cache_lock:
            return self._cache.get(character)

    @contextmanager
    def _key_lock(self, character: str) -> Iterator[None]:
        """Serialize fetches of one character; the entry is dropped when the last user leaves."""
        with self._cache_lock:
            slot = self._key_locks.get(character)
            if slot is None:
                slot = self._key_locks[character] = [threading.Lock(), 0]
            slot[1] += 1
        try:
            with slot[0]:
                yield
        finally:
            with self._cache_lock:
                slot[1] -= 1
                if slot[1] == 0:
                    del self._key_locks[character]

    def resolve(self, character: str) -> Optional[CharacterRecord]:
        """
        Return the record for `character`, or None if no source and no fallback
        entry knows it. The returned record is shared with the cache; treat it as
        read-only.

        Raises InputInvalid for blank input.
        """
        character = (character or "").strip()
        if not character:
            raise InputInvalid("empty character")

        hit = self.cached(character)
        if hit is not None:
            logger.debug("cache hit: %s", character)
            return hit

        with self._key_lock(character):
            # another request may have filled it while we waited
            hit = self.cached(character)
            if hit is not None:
                return hit

            record = self._fetch(character)
            if record is not None:
                with self._cache_lock:
                    self._cache.setdefault(character, record)
                    return self._cache[character]

        fallback = self.fallback.get(character)
        if fallback is not None:
            logger.info("%s: resolved from fallback table", character)
            return fallback

        logger.info("%s: not found in any source", character)
        return None

    def _fetch(self, character: str) -> Optional[CharacterRecord]:
        for source in self.sources:
            try:
                entry = source.lookup(character)
            except SourceUnavailable as e:
                logger.warning("Source unavailable, trying next: %s", e)
                continue
            if entry is None:
                logger.debug("%s: no entry in %s", character, source.name)
                continue
            logger.debug("%s: resolved from %s", character, source.name)
            return build_record(entry, source.name, self.translate)
        return None

    def warm_up(self) -> None:
        for source in self.sources:
            try:
                source.warm_up()
            except SourceUnavailable as e:
                logger.warning("Warm-up failed: %s", e)
