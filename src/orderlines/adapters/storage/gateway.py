"""HTTP gateway to the orders storage API."""

from __future__ import annotations

from dataclasses import replace
from http import HTTPStatus
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from orderlines.adapters.http_resilience import ResilientClient
from orderlines.config.errors import ConfigurationError
from orderlines.domain.errors import (
    RemoteStatusError,
    StorageResponseError,
    StorageTransportError,
)
from orderlines.domain.ports.gateway import Operation

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType

    from orderlines.config.http_resilience import ResilienceConfig
    from orderlines.config.storage import StorageConfig
    from orderlines.domain.model import Document

    from .context import RequestContext

log = getLogger(__name__)


class StorageGateway:
    """Issues single operations against storage endpoints and normalises the answer.

    One instance owns one pooled client and may be shared by any number of
    concurrent calls. Use it as an async context manager to close the client.
    """

    def __init__(
        self,
        *,
        resilience: ResilienceConfig,
        headers: Mapping[str, str] | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        if resilience.base_url is None:
            raise ConfigurationError("Missing storage base_url in resilience configuration")
        self._resilience = resilience
        self._headers = dict(headers) if headers else {}
        self._client = (client_factory or ResilientClient)(resilience)

    @classmethod
    def from_context(
        cls,
        context: RequestContext,
        config: StorageConfig,
        *,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> StorageGateway:
        resilience = config.resilience
        if context.okapi_url:
            resilience = replace(resilience, base_url=context.okapi_url.rstrip("/"))
        return cls(resilience=resilience, headers=context.headers, client_factory=client_factory)

    async def __aenter__(self) -> StorageGateway:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def perform(
        self,
        operation: Operation,
        path: str,
        document: Document | None = None,
    ) -> Document:
        log.info("Calling %s %s", operation, path)
        response = await self._send(operation, path, document)

        # An earlier, partially failed delete of the order or line may have removed
        # this record already; that must not fail the retry.
        if response.status_code == HTTPStatus.NOT_FOUND:
            log.info("The %s %s operation found no record", operation, path)
            return {}

        body = self._extract_body(operation, path, response)
        if not body:
            log.info("The %s %s operation completed with no response body", operation, path)
        else:
            log.debug(
                "The %s %s operation completed with following response body: %s",
                operation,
                path,
                body,
            )
        return body

    async def get_document(self, path: str) -> Document:
        log.debug("Calling GET %s", path)
        response = await self._send(Operation.READ, path)
        body = self._extract_body(Operation.READ, path, response)
        log.debug("The response is valid. The response body: %s", body)
        return body

    async def _send(
        self,
        operation: Operation,
        path: str,
        document: Document | None = None,
    ) -> httpx.Response:
        try:
            return await self._client.request(
                str(operation),
                path,
                json=document,
                headers=self._headers,
            )
        except httpx.TransportError as exc:
            log.error("Exception performing http request %s %s: %s", operation, path, exc)
            raise StorageTransportError(f"{operation} {path} failed: {exc}") from exc

    @staticmethod
    def _extract_body(operation: Operation, path: str, response: httpx.Response) -> Document:
        if not response.is_success:
            message = _error_message(response)
            log.error(
                "Exception calling %s %s: %s %s",
                operation,
                path,
                response.status_code,
                message,
            )
            raise RemoteStatusError(response.status_code, message)

        if not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError as exc:
            if operation is Operation.DELETE:
                return {}
            raise StorageResponseError(f"{operation} {path} returned a non-JSON body") from exc
        if not isinstance(payload, dict):
            raise StorageResponseError(f"{operation} {path} returned an unexpected payload")
        return payload


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        message = payload.get("errorMessage")
        if isinstance(message, str) and message:
            return message
        errors = payload.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            first = errors[0].get("message")
            if first:
                return str(first)
    text = response.text.strip()
    return text or response.reason_phrase
