"""Urgency scoring backed by the Mistral chat-completions API.

One request per complaint. Any failure (missing key, transport error,
non-2xx status, unexpected payload, no number in the reply, number outside
[0, 1]) degrades to the neutral fallback score, flagged as such.
"""

import re
from typing import Any

import httpx
import structlog

from core.config import settings
from core.exceptions import ScoringError
from domain.entities.urgency import ScoreOrigin, UrgencyAssessment

logger = structlog.get_logger()

SYSTEM_PROMPT = (
    "You are an AI that analyzes civic complaints and assigns an urgency score "
    "from 0 to 1, where 1 is most urgent."
)

USER_PROMPT_TEMPLATE = (
    "Please analyze this civic complaint and return only a number between 0 and 1 "
    'representing its urgency: "{description}"'
)

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def parse_score(content: str) -> float:
    """Extract the leading numeric token of a model reply as a score.

    Raises:
        ScoringError: If the reply holds no number or the number is outside [0, 1].
    """
    match = _NUMBER_RE.search(content.strip())
    if not match:
        raise ScoringError(f"No numeric score in reply: {content[:80]!r}")
    value = float(match.group(0))
    if not 0.0 <= value <= 1.0:
        raise ScoringError(f"Score out of range: {value}")
    return value


class MistralUrgencyScorer:
    """IUrgencyScorer implementation calling Mistral over HTTP."""

    def __init__(
        self,
        api_key: str = settings.mistral_api_key,
        api_url: str = settings.mistral_api_url,
        model: str = settings.mistral_model,
        timeout: float = settings.urgency_timeout_seconds,
        fallback_score: float = settings.urgency_fallback_score,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._model = model
        self._timeout = timeout
        self._fallback_score = fallback_score
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def build_payload(self, description: str) -> dict[str, Any]:
        """Build the single-turn classification request body."""
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": USER_PROMPT_TEMPLATE.format(description=description),
                },
            ],
        }

    async def score(self, description: str) -> UrgencyAssessment:
        """Score a complaint description. Never raises."""
        try:
            value = await self._request_score(description)
        except Exception as e:
            logger.warning(
                "urgency_scoring_failed",
                error=str(e),
                error_type=type(e).__name__,
                fallback_score=self._fallback_score,
            )
            return UrgencyAssessment(score=self._fallback_score, origin=ScoreOrigin.FALLBACK)

        logger.info("urgency_scored", score=value)
        return UrgencyAssessment(score=value, origin=ScoreOrigin.ASSESSED)

    async def _request_score(self, description: str) -> float:
        if not self._api_key:
            raise ScoringError("Mistral API key is not configured")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }
        payload = self.build_payload(description)

        if self._client is not None:
            response = await self._client.post(
                self._api_url, json=payload, headers=headers, timeout=self._timeout
            )
        else:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self._api_url, json=payload, headers=headers, timeout=self._timeout
                )

        response.raise_for_status()
        data = response.json()
        content = data["choices"][0]["message"]["content"]
        return parse_score(str(content))

    async def aclose(self) -> None:
        """Close the shared HTTP client, if one was supplied."""
        if self._client is not None:
            await self._client.aclose()
