from __future__ import annotations

import json
from pathlib import Path

import pytest

from fakes import FakeFetcher, nested_page
from workers.visitor_monitor.models import LocationToken


@pytest.fixture
def locations() -> list[LocationToken]:
    return [
        LocationToken(location="Boulderwelt West", token="tok-a"),
        LocationToken(location="Einstein", token="tok-b"),
        LocationToken(location="Heavens Gate", token="tok-c"),
    ]


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher(
        {
            "tok-a": nested_page("47", "33"),
            "tok-b": nested_page("12", "88"),
            "tok-c": nested_page("0", "100"),
        }
    )


@pytest.fixture
def token_file(tmp_path: Path, locations: list[LocationToken]) -> Path:
    path = tmp_path / "tokens.json"
    path.write_text(
        json.dumps([{"location": t.location, "token": t.token} for t in locations]),
        encoding="utf-8",
    )
    return path
