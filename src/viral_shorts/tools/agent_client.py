"""Agent invocation service: async httpx client.

Sends a natural-language task plus an agent id and returns a tagged outcome.
Nothing raised by the transport escapes ``invoke``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import httpx
import structlog

from viral_shorts.config import settings
from viral_shorts.models.fields import as_mapping

logger = structlog.get_logger()


class AgentServiceError(RuntimeError):
    """The agent service was unreachable or answered with a failure."""


class FailureReason(str, Enum):
    TRANSPORT = "transport"
    EMPTY = "empty"


@dataclass
class AgentResult:
    result: Any
    artifact_urls: list[str] = field(default_factory=list)


@dataclass
class AgentFailure:
    reason: FailureReason
    message: str
    artifact_urls: list[str] = field(default_factory=list)


AgentOutcome = AgentResult | AgentFailure


def extract_artifact_urls(envelope: Any) -> list[str]:
    """Pull ``module_outputs.artifact_files[*].file_url`` from a raw envelope."""
    files = as_mapping(as_mapping(envelope).get("module_outputs")).get("artifact_files")
    if not isinstance(files, list):
        return []
    urls: list[str] = []
    for item in files:
        url = as_mapping(item).get("file_url")
        if isinstance(url, str) and url:
            urls.append(url)
    return urls


def _is_empty(result: Any) -> bool:
    # Objects and arrays count as a payload even when empty
    if isinstance(result, (dict, list)):
        return False
    return not result


class AgentClient:
    def __init__(
        self,
        base_url: str = settings.agent_api_base_url,
        api_key: str = settings.agent_api_key,
        timeout: Optional[float] = settings.http_timeout_sec,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def _post(self, payload: dict) -> dict:
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as http:
                resp = await http.post(
                    f"{self.base_url}/agent/invoke", json=payload, headers=headers
                )
                resp.raise_for_status()
                body = resp.json()
        except httpx.HTTPError as exc:
            raise AgentServiceError(f"Agent service request failed: {exc}") from exc
        except ValueError as exc:
            raise AgentServiceError("Agent service returned invalid JSON") from exc
        return as_mapping(body)

    async def invoke(self, prompt: str, agent_id: str) -> AgentOutcome:
        """Invoke one agent and classify the envelope.

        Returns:
            AgentResult when the service reports success with a result
            payload, otherwise AgentFailure (TRANSPORT for network/status
            failures or ``success: false``, EMPTY for a successful envelope
            without a result).
        """
        logger.info("agent_client.invoke", agent_id=agent_id, prompt_len=len(prompt))

        try:
            envelope = await self._post({"message": prompt, "agent_id": agent_id})
        except AgentServiceError as exc:
            logger.warning("agent_client.transport_failed", agent_id=agent_id, error=str(exc))
            return AgentFailure(reason=FailureReason.TRANSPORT, message=str(exc))

        artifact_urls = extract_artifact_urls(envelope)

        if envelope.get("success") is not True:
            error = envelope.get("error")
            message = error if isinstance(error, str) and error else "Agent reported failure"
            logger.warning("agent_client.unsuccessful", agent_id=agent_id, error=message)
            return AgentFailure(
                reason=FailureReason.TRANSPORT, message=message, artifact_urls=artifact_urls
            )

        result = as_mapping(envelope.get("response")).get("result")
        if _is_empty(result):
            logger.warning("agent_client.empty_result", agent_id=agent_id)
            return AgentFailure(
                reason=FailureReason.EMPTY,
                message="Agent returned no data",
                artifact_urls=artifact_urls,
            )

        logger.info(
            "agent_client.done",
            agent_id=agent_id,
            artifact_count=len(artifact_urls),
        )
        return AgentResult(result=result, artifact_urls=artifact_urls)
