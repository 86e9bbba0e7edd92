"""
Document upload service.

Posts generated unit files to a Solr core inside one logical transaction:
every unit is posted and then committed, or the core is rolled back.

Dependencies: atcoder_search.boundary.solr
System role: Use case behind the ``post`` command
"""

import asyncio
import logging
from pathlib import Path

from atcoder_search.boundary.solr import StandaloneSolrCore
from atcoder_search.core.exceptions import AtCoderSearchException, UploadError
from atcoder_search.core.indexing import FileSink
from atcoder_search.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class DocumentUploader:
    """Posts unit files produced by the generation pipeline."""

    def __init__(self, core: StandaloneSolrCore) -> None:
        self.core = core

    async def post_documents(
        self,
        save_dir: Path | str,
        prefix: str = "doc",
        optimize: bool = False,
        truncate: bool = False,
    ) -> int:
        """
        Post every unit in ``save_dir`` in sequence order.

        Args:
            save_dir: Directory holding unit files
            prefix: Unit file prefix
            optimize: Optimize instead of a plain commit
            truncate: Delete every document of the core first

        Returns:
            int: Number of units posted

        Raises:
            UploadError: If any step fails; the core has been rolled back
        """
        units = FileSink(save_dir, prefix=prefix).units()
        current: Path | None = None
        try:
            if truncate:
                logger.info(f"{__name__}:post_documents - Truncating core {self.core.name}")
                await self.core.truncate()

            for path in units:
                current = path
                body = await asyncio.to_thread(path.read_bytes)
                await self.core.post(body)
                logger.info(
                    f"{__name__}:post_documents - Posted unit",
                    extra={"core": self.core.name, "path": str(path)},
                )
            current = None

            if optimize:
                await self.core.optimize()
            else:
                await self.core.commit()
        except (AtCoderSearchException, OSError) as e:
            log_exception_with_context(
                logger,
                f"{__name__}:post_documents - Failed to post documents, rolling back",
                e,
                core=self.core.name,
                path=str(current) if current else None,
            )
            try:
                await self.core.rollback()
            except AtCoderSearchException as rollback_error:
                log_exception_with_context(
                    logger,
                    f"{__name__}:post_documents - Rollback failed",
                    rollback_error,
                    core=self.core.name,
                )
            raise UploadError(
                f"failed to post documents: {e}", path=str(current) if current else None
            ) from e

        logger.info(
            f"{__name__}:post_documents - Posted {len(units)} units",
            extra={"core": self.core.name, "optimize": optimize, "truncate": truncate},
        )
        return len(units)
