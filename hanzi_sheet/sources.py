"""
Dictionary sources the resolver tries in priority order.

Every source answers `lookup(character)` with a SourceEntry, or None when it
has no entry for the character. Anything that keeps a source from answering
(network error, non-2xx status, unparseable payload, missing file) is raised
as SourceUnavailable.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, Optional
from urllib.parse import quote

import requests

from .errors import SourceUnavailable
from .models import SourceEntry

logger = logging.getLogger(__name__)


class DictionarySource:
    name = "source"

    def lookup(self, character: str) -> Optional[SourceEntry]:
        raise NotImplementedError

    def warm_up(self) -> None:
        """Preload data if the source supports it. Default: nothing to do."""


def _first_str(v: Any) -> str:
    """Pick a usable string from a field that may be a str or list of str."""
    if v is None:
        return ""
    if isinstance(v, str):
        return v.strip()
    if isinstance(v, list):
        for x in v:
            if isinstance(x, str) and x.strip():
                return x.strip()
        return ""
    return str(v).strip()


def _join_defs(v: Any) -> str:
    if isinstance(v, list):
        return "; ".join(x.strip() for x in v if isinstance(x, str) and x.strip())
    return _first_str(v)


def _as_int(v: Any) -> int:
    if isinstance(v, bool):
        return 0
    if isinstance(v, int):
        return max(v, 0)
    if isinstance(v, str) and v.strip().isdigit():
        return int(v.strip())
    return 0


def _parse_line(line: str) -> Optional[SourceEntry]:
    line = line.strip()
    if not line:
        return None

    # JSON-lines form, as published upstream:
    #   {"character": "学", "definition": "learning, knowledge", "pinyin": ["xué"], ...}
    if line.startswith("{"):
        try:
            obj = json.loads(line)
        except json.JSONDecodeError:
            return None
        if not isinstance(obj, dict):
            return None
        zi = _first_str(obj.get("character"))
        pinyin = _first_str(obj.get("pinyin"))
        definition = _first_str(obj.get("definition"))
    else:
        # Tab-separated form: character, pinyin, definition
        if "\t" not in line:
            return None
        parts = [t.strip() for t in line.split("\t")]
        if len(parts) < 3:
            return None
        zi, pinyin, definition = parts[0], parts[1], parts[2]

    if not zi or not pinyin or not definition:
        return None
    return SourceEntry(character=zi, pinyin=pinyin, definition=definition)


def parse_dictionary_text(text: str) -> Dict[str, SourceEntry]:
    """Index a Make Me a Hanzi style dictionary payload by character. Bad lines are skipped."""
    index: Dict[str, SourceEntry] = {}
    for line in text.split("\n"):
        entry = _parse_line(line)
        if entry is None:
            continue
        index[entry.character] = entry
    return index


class _IndexedSource(DictionarySource):
    """Loads the whole dictionary once and answers lookups from memory."""

    def __init__(self) -> None:
        self._index: Optional[Dict[str, SourceEntry]] = None
        self._load_lock = threading.Lock()

    def _load_text(self) -> str:
        raise NotImplementedError

    @property
    def loaded(self) -> bool:
        return self._index is not None

    def _ensure_index(self) -> Dict[str, SourceEntry]:
        if self._index is not None:
            return self._index
        with self._load_lock:
            if self._index is None:
                # A failed load is not remembered; the next lookup tries again.
                index = parse_dictionary_text(self._load_text())
                if not index:
                    raise SourceUnavailable(self.name, "dictionary payload has no usable entries")
                logger.info("%s: indexed %d characters", self.name, len(index))
                self._index = index
        return self._index

    def lookup(self, character: str) -> Optional[SourceEntry]:
        return self._ensure_index().get(character)

    def warm_up(self) -> None:
        self._ensure_index()


class MakeMeAHanziSource(_IndexedSource):
    name = "makemeahanzi"

    def __init__(
        self,
        url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        super().__init__()
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def _load_text(self) -> str:
        logger.info("Downloading dictionary from: %s", self.url)
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise SourceUnavailable(self.name, f"could not load {self.url}: {e}") from e
        try:
            return resp.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SourceUnavailable(self.name, f"payload from {self.url} is not UTF-8") from e


class LocalDictionarySource(_IndexedSource):
    name = "local"

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path)

    def _load_text(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailable(self.name, f"cannot read {self.path}: {e}") from e


class JsonApiSource(DictionarySource):
    """
    One GET per character against a URL template, e.g.
    `https://dict.example.org/chars/{character}`.

    Expected response object (aliases accepted):
      {"pinyin": "xué", "definition": "to learn", "strokes": 8}
    """

    name = "json-api"

    PINYIN_KEYS = ("pinyin", "pronunciation")
    DEFINITION_KEYS = ("definition", "meaning", "definitions")
    STROKE_KEYS = ("strokes", "stroke_count", "strokeCount")

    def __init__(
        self,
        url_template: str,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        self.url_template = url_template
        self.session = session or requests.Session()
        self.timeout = timeout

    def url_for(self, character: str) -> str:
        return self.url_template.format(character=quote(character))

    @staticmethod
    def _pick(obj: Dict[str, Any], keys: Iterable[str]) -> Any:
        for k in keys:
            if obj.get(k) not in (None, "", []):
                return obj[k]
        return None

    def lookup(self, character: str) -> Optional[SourceEntry]:
        url = self.url_for(character)
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise SourceUnavailable(self.name, f"request failed: {e}") from e

        if resp.status_code == 404:
            return None
        if not 200 <= resp.status_code < 300:
            raise SourceUnavailable(self.name, f"HTTP {resp.status_code} for {url}")

        try:
            data = resp.json()
        except ValueError as e:
            raise SourceUnavailable(self.name, f"invalid JSON from {url}") from e
        if not isinstance(data, dict):
            raise SourceUnavailable(self.name, f"expected a JSON object from {url}")
        if not data:
            return None

        pinyin = _first_str(self._pick(data, self.PINYIN_KEYS))
        definition = _join_defs(self._pick(data, self.DEFINITION_KEYS))
        if not pinyin or not definition:
            return None

        return SourceEntry(
            character=character,
            pinyin=pinyin,
            definition=definition,
            strokes=_as_int(self._pick(data, self.STROKE_KEYS)),
        )
