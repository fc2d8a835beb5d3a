"""Shared pytest fixtures for planproof unit tests."""
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from planproof.artifacts.writer import ArtifactWriter
from tests.fixtures import INDEXED_VIEW_USER_OPTIONS, VIEW_INDEX, load_plan
from tests.fixtures.fake_db import FakeConnection, FakeSqlServer


@pytest.fixture(scope="session")
def indexed_view_plan() -> str:
    """SHOWPLAN that seeks the indexed view's clustered index."""
    return load_plan("indexed_view_plan")


@pytest.fixture(scope="session")
def base_table_plan() -> str:
    """SHOWPLAN that joins dbo.Customers and dbo.Orders directly."""
    return load_plan("base_table_plan")


@pytest.fixture()
def writer(tmp_path: Path) -> ArtifactWriter:
    return ArtifactWriter(tmp_path / "artifacts")


@pytest.fixture()
def make_connection() -> Callable[..., FakeConnection]:
    """Factory for a FakeConnection over a FakeSqlServer.

    Defaults describe a healthy indexed view and a fully configured session;
    keyword arguments override any FakeSqlServer parameter.
    """

    def _make(**overrides) -> FakeConnection:
        options = {
            "user_options": INDEXED_VIEW_USER_OPTIONS,
            "view_index": VIEW_INDEX,
            **overrides,
        }
        return FakeConnection(FakeSqlServer(**options))

    return _make
