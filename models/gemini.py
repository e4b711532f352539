# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

import asyncio
import logging
import time
from typing import Protocol

from google import genai

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-1.5-pro"
DEFAULT_TIMEOUT_SECONDS = 30.0


class GeminiInvalidResponseException(Exception):
    pass


class TextGenerator(Protocol):
    """Anything that turns a prompt into a single text completion."""

    async def generate_text(self, prompt: str) -> str:
        ...


class GeminiClient:
    """
    Long-lived wrapper around a genai.Client for single, non-streaming completions.

    Args:
        api_key (str): The Gemini API key.
        model (str): Model identifier, fixed for the lifetime of the client.
        timeout_seconds (float): Upper bound on a single completion call.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        if not api_key:
            raise ValueError("GEMINI_API_KEY is required for GeminiClient")
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._client = genai.Client(api_key=api_key)

    async def generate_text(self, prompt: str) -> str:
        start_time = time.time()
        truncated_prompt = (prompt[:200] + "...") if len(prompt) > 200 else prompt
        logger.debug("Calling Gemini %s, prompt: '%s'", self.model, truncated_prompt)

        response = await asyncio.wait_for(
            self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
            ),
            timeout=self.timeout_seconds,
        )
        logger.debug("Gemini call took: %.2fs", time.time() - start_time)

        if not response.text:
            raise GeminiInvalidResponseException()
        return response.text
