from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import List

import requests
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from . import config
from .errors import InputInvalid
from .fallback import load_fallback_table
from .models import CharacterRecord, Worksheet
from .resolver import CharacterResolver
from .sources import DictionarySource, JsonApiSource, LocalDictionarySource, MakeMeAHanziSource
from .worksheet import build_worksheet

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

MSG_EMPTY_INPUT = "Bitte geben Sie ein Zeichen ein."
MSG_NOT_FOUND = 'Keine Daten für Zeichen "{character}" gefunden.'


def build_sources() -> List[DictionarySource]:
    session = requests.Session()
    sources: List[DictionarySource] = [
        MakeMeAHanziSource(config.MMH_URL, session=session, timeout=config.HTTP_TIMEOUT),
    ]
    if config.JSON_API_URL:
        sources.append(JsonApiSource(config.JSON_API_URL, session=session, timeout=config.HTTP_TIMEOUT))
    if config.LOCAL_DICTIONARY_PATH.exists():
        sources.append(LocalDictionarySource(config.LOCAL_DICTIONARY_PATH))
    return sources


@lru_cache(maxsize=1)
def get_resolver() -> CharacterResolver:
    resolver = CharacterResolver(build_sources(), load_fallback_table())
    logger.info(
        "Resolver ready: sources=%s fallback=%d",
        [s.name for s in resolver.sources],
        len(resolver.fallback),
    )
    return resolver


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.WARM_UP:
        # preload the big dictionary so the first lookup is fast
        await run_in_threadpool(get_resolver().warm_up)
    yield


app = FastAPI(title="hanzi-worksheet", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/health")
def health(resolver: CharacterResolver = Depends(get_resolver)):
    return {
        "ok": True,
        "sources": [s.name for s in resolver.sources],
        "fallback_size": len(resolver.fallback),
        "cache_size": resolver.cache_size,
    }


def _resolve_or_raise(resolver: CharacterResolver, character: str) -> CharacterRecord:
    try:
        record = resolver.resolve(character)
    except InputInvalid:
        raise HTTPException(400, detail=MSG_EMPTY_INPUT)
    if record is None:
        raise HTTPException(404, detail=MSG_NOT_FOUND.format(character=character.strip()))
    return record


@app.get("/characters/{character}", response_model=CharacterRecord)
def get_character(character: str, resolver: CharacterResolver = Depends(get_resolver)):
    return _resolve_or_raise(resolver, character)


@app.get("/worksheet", response_model=Worksheet)
def get_worksheet(
    char: str = Query("", description="Character to build the practice sheet for"),
    resolver: CharacterResolver = Depends(get_resolver),
):
    return build_worksheet(_resolve_or_raise(resolver, char))
