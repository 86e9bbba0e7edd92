"""
Tests for the document generation service.
"""

import json
from unittest.mock import MagicMock

import pytest

from atcoder_search.application.services.generation_service import (
    DocumentGenerator,
    create_generator,
)
from atcoder_search.boundary.db.sources import (
    ProblemRowSource,
    RecommendRowSource,
    UserRowSource,
)
from atcoder_search.configs import Settings
from atcoder_search.configs.generation import GenerationSettings
from atcoder_search.core.exceptions import GenerationError
from atcoder_search.core.indexing import FileSink
from atcoder_search.core.indexing.rows import UserRow


class UserSource:
    def __init__(self, count: int, broken: int | None = None):
        self.count = count
        self.broken = broken

    async def read_rows(self):
        for i in range(self.count):
            if i == self.broken:
                raise RuntimeError("cursor closed")
            yield UserRow(f"user{i}", 1000 + i, 1200 + i, None, None, "JP", None, 1, i + 1, 0)


class TestDocumentGenerator:
    """Test suite for DocumentGenerator.run."""

    @pytest.mark.asyncio
    async def test_run_writes_units(self, tmp_path):
        sink = FileSink(tmp_path / "users")
        generator = DocumentGenerator("users", UserSource(5), sink, chunk_size=2)

        units = await generator.run()

        assert units == 3
        paths = sink.units()
        assert [p.name for p in paths] == ["doc-1.json", "doc-2.json", "doc-3.json"]
        documents = [doc for p in paths for doc in json.loads(p.read_text(encoding="utf-8"))]
        assert sorted(doc["user_name"] for doc in documents) == [f"user{i}" for i in range(5)]
        assert all(doc["color"] == "green" for doc in documents)

    @pytest.mark.asyncio
    async def test_run_removes_previous_units(self, tmp_path):
        sink = FileSink(tmp_path)
        for seq in range(1, 6):
            sink.write_unit(seq, [{"stale": True}])

        units = await DocumentGenerator("users", UserSource(1), sink, chunk_size=10).run()

        assert units == 1
        assert [p.name for p in sink.units()] == ["doc-1.json"]
        assert "stale" not in sink.path_for(1).read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_run_propagates_failure(self, tmp_path):
        generator = DocumentGenerator(
            "users", UserSource(10, broken=3), FileSink(tmp_path), chunk_size=2
        )

        with pytest.raises(GenerationError):
            await generator.run()

    @pytest.mark.asyncio
    async def test_clean_failure(self, tmp_path):
        sink = MagicMock(spec=FileSink)
        sink.save_dir = tmp_path
        sink.clean.side_effect = PermissionError("read-only file system")
        generator = DocumentGenerator("users", UserSource(1), sink, chunk_size=1)

        with pytest.raises(GenerationError) as exc_info:
            await generator.run()

        assert isinstance(exc_info.value.cause, PermissionError)
        sink.write_unit.assert_not_called()


class TestCreateGenerator:
    """Test suite for create_generator."""

    @pytest.mark.parametrize(
        "domain, source_type, chunk",
        [
            ("problems", ProblemRowSource, 1000),
            ("users", UserRowSource, 10000),
            ("recommends", RecommendRowSource, 1000),
        ],
    )
    def test_domains(self, tmp_path, domain, source_type, chunk):
        settings = Settings(generation=GenerationSettings(save_directory=tmp_path))

        generator = create_generator(domain, MagicMock(), settings)

        assert isinstance(generator.source, source_type)
        assert generator.chunk_size == chunk
        assert generator.sink.save_dir == tmp_path / domain

    def test_save_dir_override(self, tmp_path):
        generator = create_generator("users", MagicMock(), Settings(), save_dir=tmp_path)

        assert generator.sink.save_dir == tmp_path

    def test_unknown_domain(self):
        with pytest.raises(ValueError):
            create_generator("submissions", MagicMock(), Settings())
