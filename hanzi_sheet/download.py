#!/usr/bin/env python3
"""
Download the Make Me a Hanzi dictionary.txt for offline use.

The service picks the file up as its local source (HANZI_LOCAL_DICTIONARY,
default DATA_DIR/dictionary.txt), so lookups keep working when the remote
copy is unreachable.

Source: https://github.com/skishore/makemeahanzi (dictionary data is LGPL;
keep attribution if you redistribute it).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import requests

from . import config
from .sources import parse_dictionary_text

logger = logging.getLogger(__name__)


def download_if_needed(
    out_path: Path,
    url: str = config.MMH_URL,
    force: bool = False,
    session: Optional[requests.Session] = None,
    timeout: float = config.HTTP_TIMEOUT,
) -> Path:
    if out_path.exists() and not force:
        logger.info("Already present: %s", out_path)
        return out_path

    session = session or requests.Session()
    logger.info("Downloading dictionary from: %s", url)
    resp = session.get(url, timeout=timeout)
    resp.raise_for_status()

    text = resp.content.decode("utf-8")
    entries = parse_dictionary_text(text)
    if not entries:
        raise RuntimeError(f"Downloaded file from {url} has no usable dictionary entries")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    # Write via a temp file then rename, so a broken download never replaces a good copy.
    tmp_path = out_path.with_suffix(out_path.suffix + ".tmp")
    try:
        tmp_path.write_text(text, encoding="utf-8")
        tmp_path.replace(out_path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
    logger.info("Wrote: %s  (characters=%d)", out_path, len(entries))
    return out_path


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    ap.add_argument("--out", type=Path, default=config.LOCAL_DICTIONARY_PATH, help="Output path")
    ap.add_argument("--url", default=config.MMH_URL, help="Dictionary URL")
    ap.add_argument("--force", action="store_true", help="Redownload even if the file exists")
    args = ap.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(message)s")
    try:
        download_if_needed(args.out, url=args.url, force=args.force)
    except (requests.RequestException, RuntimeError, UnicodeDecodeError) as e:
        logger.error("Download failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
