"""
modules/tool_usage/llm_client.py
----------------------------------
LLM client used by the text generator. Any object with
`complete(prompt: str) -> str` works; GeminiClient is the production one.
"""

from __future__ import annotations
import logging
from typing import Optional, Protocol

from google import genai as genai_sdk

import config

logger = logging.getLogger(__name__)


class LLMClient(Protocol):
    def complete(self, prompt: str) -> str:
        ...


class GeminiClient:

    def __init__(
        self,
        model: str = config.LLM_MODEL_NAME,
        api_key: str = config.LLM_API_KEY,
        timeout_seconds: int = config.LLM_TIMEOUT_SECONDS,
    ):
        self._client = genai_sdk.Client(
            api_key=api_key,
            # google-genai takes the HTTP timeout in milliseconds
            http_options={"timeout": timeout_seconds * 1000},
        )
        self._model = model

    def complete(self, prompt: str) -> str:
        response = self._client.models.generate_content(
            model=self._model,
            contents=prompt,
        )
        return response.text or ""


def make_llm_client() -> Optional[LLMClient]:
    """
    None when USE_STUB_LLM is on or no key is configured; every generated
    field then comes from the templated fallbacks.
    """
    if config.USE_STUB_LLM:
        logger.info("USE_STUB_LLM is on, text generation uses templates")
        return None
    if not config.LLM_API_KEY:
        logger.warning("LLM_API_KEY is not set, text generation uses templates")
        return None
    return GeminiClient()
