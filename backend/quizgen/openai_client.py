from __future__ import annotations
import logging
import httpx
from typing import Any, Dict, Optional
from .exceptions import LLMError, LLMNotConfiguredError
from .settings import settings

logger = logging.getLogger(__name__)


class ChatCompletionClient:
	"""Single-shot client for an OpenAI-style chat-completion endpoint.

	No retries and no streaming; any failure surfaces as ``LLMError``.
	"""

	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		temperature: Optional[float] = None,
		max_tokens: Optional[int] = None,
		http_client: Optional[httpx.AsyncClient] = None,
	) -> None:
		self.api_key = api_key or settings.openai_api_key
		if not self.api_key:
			raise LLMNotConfiguredError("OPENAI_API_KEY is not configured")
		self.base_url = base_url or settings.openai_base_url
		self.model = model or settings.openai_model
		self.temperature = settings.openai_temperature if temperature is None else temperature
		self.max_tokens = max_tokens or settings.openai_max_tokens
		self._client = http_client or httpx.AsyncClient(timeout=settings.openai_timeout)

	async def complete(self, prompt: str, *, system_prompt: str) -> str:
		headers = {
			"Authorization": f"Bearer {self.api_key}",
			"Content-Type": "application/json",
		}
		payload: Dict[str, Any] = {
			"model": self.model,
			"messages": [
				{"role": "system", "content": system_prompt},
				{"role": "user", "content": prompt},
			],
			"temperature": self.temperature,
			"max_tokens": self.max_tokens,
		}
		try:
			r = await self._client.post(self.base_url, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			raise LLMError(
				f"Chat completion API error: {http_err.response.status_code} {http_err.response.reason_phrase}",
				status_code=http_err.response.status_code,
			) from http_err
		except httpx.RequestError as net_err:
			raise LLMError(f"Chat completion request failed: {net_err}") from net_err

		try:
			data = r.json()
			content = data["choices"][0]["message"]["content"]
		except (ValueError, KeyError, IndexError, TypeError) as err:
			raise LLMError(f"Unexpected chat completion response: {r.text[:500]}") from err
		if not content:
			raise LLMError("No content received from chat completion API")

		usage = data.get("usage") or {}
		logger.info(
			"Chat completion ok: model=%s prompt_tokens=%s completion_tokens=%s",
			self.model,
			usage.get("prompt_tokens"),
			usage.get("completion_tokens"),
		)
		return content

	async def aclose(self) -> None:
		await self._client.aclose()
