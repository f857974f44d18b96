"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from biaslens.registry import reset_sources

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def _builtin_sources():
    reset_sources()
    yield
    reset_sources()


@pytest.fixture
def bbc_html() -> str:
    return _read_fixture("bbc_article.html")


@pytest.fixture
def cbs_html() -> str:
    return _read_fixture("cbs_article.html")


@pytest.fixture
def guardian_html() -> str:
    return _read_fixture("guardian_article.html")


@pytest.fixture
def no_jsonld_html() -> str:
    return _read_fixture("no_jsonld.html")


@pytest.fixture
def no_article_html() -> str:
    return _read_fixture("no_article.html")


@pytest.fixture
def profiles_path() -> Path:
    return FIXTURES_DIR / "sources.yaml"
