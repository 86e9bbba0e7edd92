"""
Shared test fixtures and configuration for entire test suite.

Provides: sample task pages, in-memory SQLite session factory, in-memory sinks
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import threading
from typing import Any

import pytest

BILINGUAL_HTML = """
<html>
<head>
  <meta property="og:url" content="https://atcoder.jp/contests/abc300/tasks/abc300_a" />
</head>
<body>
<span class="lang-ja">
  <div class="part">
    <section>
      <h3>問題文</h3>
      <p>整数 <var>N</var> が与えられます。</p>
      <pre>3</pre>
    </section>
  </div>
  <div class="part">
    <section>
      <h3>制約</h3>
      <ul><li><var>1 \\leq N \\leq 100</var></li></ul>
    </section>
  </div>
</span>
<span class="lang-en">
  <div class="part">
    <section>
      <h3>Problem Statement</h3>
      <p>You are given an integer <var>N</var>.</p>
    </section>
  </div>
</span>
</body>
</html>
"""

JAPANESE_ONLY_HTML = """
<html><body>
<span class="lang-ja">
  <section><h3>問題文</h3><p>文字列 <var>S</var> を出力してください。</p></section>
</span>
</body></html>
"""

LEGACY_HTML = """
<html><body>
<div id="task-statement">
  <section><h3>問題文</h3><p>古い問題です。</p></section>
  <section><h3>入力</h3><pre>N</pre></section>
</div>
</body></html>
"""


class MemorySink:
    """Output sink keeping units in memory; records the write order."""

    def __init__(self, fail_on: int | None = None) -> None:
        self.units: dict[int, list[dict[str, Any]]] = {}
        self.order: list[int] = []
        self.fail_on = fail_on
        self._lock = threading.Lock()

    def write_unit(self, sequence: int, documents: list[dict[str, Any]]) -> None:
        if sequence == self.fail_on:
            raise OSError(f"disk full at unit {sequence}")
        with self._lock:
            self.units[sequence] = list(documents)
            self.order.append(sequence)

    @property
    def documents(self) -> list[dict[str, Any]]:
        return [doc for seq in sorted(self.units) for doc in self.units[seq]]


@pytest.fixture
def bilingual_html() -> str:
    return BILINGUAL_HTML


@pytest.fixture
def japanese_only_html() -> str:
    return JAPANESE_ONLY_HTML


@pytest.fixture
def legacy_html() -> str:
    return LEGACY_HTML


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
async def session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Factory bound to a database with every table created
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from atcoder_search.boundary.db.base import Base
    import atcoder_search.boundary.db.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
