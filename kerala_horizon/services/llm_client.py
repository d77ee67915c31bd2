"""
LLM Client - Unified interface for multiple LLM providers.
Supports OpenAI, Gemini and OpenRouter through their OpenAI-compatible APIs,
plus an offline mock provider.
"""
from openai import AsyncOpenAI
from typing import Optional
import json
import logging
import re

from ..config import get_llm_config, settings

logger = logging.getLogger(__name__)

TRAVEL_ASSISTANT_PROMPT = (
    "You are a helpful travel assistant for Kerala, India. "
    "Give practical, specific answers about places, food, culture and transport."
)


class LLMClient:
    """Async LLM client with OpenAI-compatible API."""

    def __init__(self):
        config = get_llm_config()

        # Use mock client if provider is 'mock'
        if settings.llm_provider == "mock":
            from .mock_llm import MockLLMClient
            self._mock = MockLLMClient()
            self.model = "mock-kerala"
            self.temperature = 0.7
            self.max_tokens = 1000
            self.client = None
        else:
            self._mock = None
            self.client = AsyncOpenAI(
                api_key=config["api_key"],
                base_url=config["base_url"],
                timeout=settings.http_timeout_seconds * 3,
            )
            self.model = config["model"]
            self.temperature = config["temperature"]
            self.max_tokens = config["max_tokens"]

    @property
    def is_mock(self) -> bool:
        return self._mock is not None

    async def chat(
        self,
        messages: list[dict],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        json_mode: bool = False
    ) -> str:
        """
        Send a chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content'
            temperature: Override default temperature
            max_tokens: Override default max tokens
            json_mode: If True, request JSON response format

        Returns:
            The assistant's response content
        """
        if self._mock is not None:
            return await self._mock.chat(messages, temperature, max_tokens, json_mode)

        kwargs = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature or self.temperature,
            "max_tokens": max_tokens or self.max_tokens,
        }

        # JSON mode support (not all providers support this)
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**kwargs)
            return response.choices[0].message.content or ""
        except Exception as e:
            # If JSON mode fails, retry without it
            if json_mode and "response_format" in kwargs:
                logger.warning(f"JSON mode rejected by {self.model}, retrying as plain text: {e}")
                del kwargs["response_format"]
                response = await self.client.chat.completions.create(**kwargs)
                return response.choices[0].message.content or ""
            raise

    async def chat_json(
        self,
        messages: list[dict],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> dict:
        """
        Send a chat request and parse JSON response.

        Returns:
            Parsed JSON dict, empty when nothing parseable came back
        """
        response = await self.chat(
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=True
        )
        return self._parse_json_response(response)

    async def get_travel_advice(self, prompt: str) -> str:
        """Ask the travel assistant a single question."""
        return await self.chat([
            {"role": "system", "content": TRAVEL_ASSISTANT_PROMPT},
            {"role": "user", "content": prompt},
        ])

    def _parse_json_response(self, text: str) -> dict:
        """Parse JSON from LLM response, handling markdown code blocks."""
        text = (text or "").strip()
        candidates = [text]

        json_match = re.search(r'```(?:json)?\s*([\s\S]*?)```', text)
        if json_match:
            candidates.append(json_match.group(1).strip())

        brace_start = text.find('{')
        brace_end = text.rfind('}')
        if brace_start != -1 and brace_end > brace_start:
            candidates.append(text[brace_start:brace_end + 1])

        # Callers read fields off the result, so only an object will do
        for candidate in candidates:
            try:
                parsed = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            if isinstance(parsed, dict):
                return parsed

        logger.warning("Could not parse JSON from LLM response")
        return {}


# Global LLM client instance
llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLM client."""
    global llm_client
    if llm_client is None:
        llm_client = LLMClient()
    return llm_client
