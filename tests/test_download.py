from __future__ import annotations

from pathlib import Path

import pytest
import requests

from conftest import MMH_TSV, FakeResponse, FakeSession
from hanzi_sheet.download import download_if_needed
from hanzi_sheet.sources import LocalDictionarySource

URL = "https://example.org/dictionary.txt"


def test_download_writes_file_for_local_source(tmp_path) -> None:
    out = tmp_path / "data" / "dictionary.txt"
    session = FakeSession({URL: MMH_TSV})

    assert download_if_needed(out, url=URL, session=session) == out
    assert LocalDictionarySource(out).lookup("学").pinyin == "xué"
    assert not out.with_suffix(".txt.tmp").exists()


def test_download_skips_existing_file(tmp_path) -> None:
    out = tmp_path / "dictionary.txt"
    out.write_text("水\tshuǐ\twater\n", encoding="utf-8")
    session = FakeSession({URL: MMH_TSV})

    download_if_needed(out, url=URL, session=session)
    assert session.calls == []

    download_if_needed(out, url=URL, session=session, force=True)
    assert session.calls == [URL]
    assert "吗" in out.read_text(encoding="utf-8")


def test_download_rejects_empty_payload(tmp_path) -> None:
    out = tmp_path / "dictionary.txt"
    session = FakeSession({URL: "<html>rate limited</html>"})
    with pytest.raises(RuntimeError):
        download_if_needed(out, url=URL, session=session)
    assert not out.exists()


def test_download_http_error(tmp_path) -> None:
    session = FakeSession({URL: FakeResponse(500, "boom")})
    with pytest.raises(requests.HTTPError):
        download_if_needed(tmp_path / "dictionary.txt", url=URL, session=session)


def test_download_removes_temp_file_when_rename_fails(tmp_path, monkeypatch) -> None:
    out = tmp_path / "dictionary.txt"
    session = FakeSession({URL: MMH_TSV})

    def broken_replace(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", broken_replace)
    with pytest.raises(OSError):
        download_if_needed(out, url=URL, session=session)

    assert not out.exists()
    assert not (tmp_path / "dictionary.txt.tmp").exists()
