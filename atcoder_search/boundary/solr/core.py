"""
Standalone Solr core client.

Async HTTP client for one core of a standalone (non-cloud) Solr server.

Endpoints:
- GET  solr/admin/cores?action=STATUS|RELOAD&core=<name>
- GET  solr/<name>/admin/ping
- POST solr/<name>/update      (JSON update commands and documents)
- GET  solr/<name>/select      (ordered, repeatable query parameters)

Dependencies: httpx, tenacity, pydantic
System role: Search engine adapter for indexing and search
"""

import logging
from typing import Any, Sequence, TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from atcoder_search.boundary.solr.models import (
    SolrCoreList,
    SolrCoreStatus,
    SolrPingResponse,
    SolrSelectResponse,
    SolrSimpleResponse,
)
from atcoder_search.core.exceptions import CoreNotFoundError, SearchEngineError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

COMMIT = b'{"commit": {}}'
OPTIMIZE = b'{"optimize": {}}'
ROLLBACK = b'{"rollback": {}}'
TRUNCATE = b'{"delete": {"query": "*:*"}}'


class StandaloneSolrCore:
    """
    Client for a single Solr core.

    Idempotent reads (ping, status, select) are retried on transport
    errors with exponential backoff. Updates are sent once.

    Usage:
        async with StandaloneSolrCore("problems", "http://localhost:8983") as core:
            await core.post(payload)
            await core.commit()
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            name: Core name
            base_url: Solr server URL; any path component is discarded
            timeout: Request timeout in seconds
            max_retries: Attempts for idempotent requests
            client: Preconfigured client, mainly for tests
        """
        url = httpx.URL(base_url)
        self.name = name
        self.base_url = str(url.copy_with(path="/", query=None, fragment=None))
        self.max_retries = max(1, max_retries)
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)
        self._owns_client = client is None

        self.admin_path = "solr/admin/cores"
        self.ping_path = f"solr/{name}/admin/ping"
        self.post_path = f"solr/{name}/update"
        self.select_path = f"solr/{name}/select"

    async def __aenter__(self) -> "StandaloneSolrCore":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        retry: bool,
        **kwargs: Any,
    ) -> httpx.Response:
        attempts = self.max_retries if retry else 1
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(httpx.TransportError),
                stop=stop_after_attempt(attempts),
                wait=wait_exponential_jitter(initial=0.5, max=10, jitter=1),
                before_sleep=lambda retry_state: logger.warning(
                    f"{__name__}:{operation} - Retry {retry_state.attempt_number}/{attempts} "
                    f"after transport error"
                ),
                reraise=True,
            ):
                with attempt:
                    response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise SearchEngineError(
                f"failed to request to solr core: {e}", operation=operation
            ) from e

        if response.is_error:
            raise SearchEngineError(
                f"unexpected error [{response.status_code}] cause [{self._error_message(response)}]",
                operation=operation,
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = SolrSimpleResponse.model_validate_json(response.content)
        except ValidationError:
            return ""
        return body.error.msg if body.error else ""

    @staticmethod
    def _parse(operation: str, response: httpx.Response, model: type[M]) -> M:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise SearchEngineError(
                f"failed to deserialize JSON data: {e.error_count()} errors",
                operation=operation,
                status_code=response.status_code,
            ) from e

    async def ping(self) -> SolrPingResponse:
        response = await self._send("ping", "GET", self.ping_path, retry=True)
        return self._parse("ping", response, SolrPingResponse)

    async def status(self) -> SolrCoreStatus:
        """
        Fetch the core status.

        Raises:
            CoreNotFoundError: If the server has no core with this name
        """
        response = await self._send(
            "status",
            "GET",
            self.admin_path,
            retry=True,
            params={"action": "STATUS", "core": self.name},
        )
        core_list = self._parse("status", response, SolrCoreList)
        status = (core_list.status or {}).get(self.name)
        if not status:
            raise CoreNotFoundError(self.name)
        try:
            return SolrCoreStatus.model_validate(status)
        except ValidationError as e:
            raise SearchEngineError(
                f"failed to deserialize core status: {e.error_count()} errors",
                operation="status",
            ) from e

    async def reload(self) -> SolrSimpleResponse:
        response = await self._send(
            "reload",
            "GET",
            self.admin_path,
            retry=False,
            params={"action": "RELOAD", "core": self.name},
        )
        return self._parse("reload", response, SolrSimpleResponse)

    async def select(
        self,
        params: Sequence[tuple[str, str]],
        document_model: type[BaseModel] | None = None,
    ) -> SolrSelectResponse:
        """
        Run a select request.

        Args:
            params: Ordered query parameters; repeated names are kept
            document_model: Model validating each returned document

        Returns:
            SolrSelectResponse: Parsed response; docs are dicts without a model
        """
        response = await self._send(
            "select", "GET", self.select_path, retry=True, params=list(params)
        )
        model = SolrSelectResponse[document_model or dict[str, Any]]
        return self._parse("select", response, model)

    async def post(self, body: bytes | str) -> SolrSimpleResponse:
        """Send a JSON update request (documents or commands)."""
        content = body.encode("utf-8") if isinstance(body, str) else body
        response = await self._send(
            "post",
            "POST",
            self.post_path,
            retry=False,
            content=content,
            headers={"Content-Type": "application/json"},
        )
        return self._parse("post", response, SolrSimpleResponse)

    async def commit(self) -> None:
        await self.post(COMMIT)

    async def optimize(self) -> None:
        await self.post(OPTIMIZE)

    async def rollback(self) -> None:
        await self.post(ROLLBACK)

    async def truncate(self) -> None:
        await self.post(TRUNCATE)
