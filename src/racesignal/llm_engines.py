"""
LLM Engine implementations for the inference service
"""

import asyncio
import json
import logging
import random
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .errors import MalformedResponseError
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class LLMEngine(ABC):
    """Abstract base class for LLM engines"""

    def __init__(self, name: str, api_key: Optional[str] = None):
        self.name = name
        self.api_key = api_key
        self.is_available = True
        self.total_requests = 0
        self.last_request_time = 0.0
        self.error_count = 0

    @abstractmethod
    async def generate_json(self, prompt: str, response_schema: Dict[str, Any],
                            temperature: float) -> str:
        """Generate a JSON-only reply constrained to response_schema"""
        pass

    async def close(self):
        """Release client resources"""
        self.is_available = False

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics"""
        return {
            "name": self.name,
            "is_available": self.is_available,
            "total_requests": self.total_requests,
            "error_count": self.error_count,
            "last_request_time": self.last_request_time
        }


class MockEngine(LLMEngine):
    """Mock engine for offline mode and testing"""

    def __init__(self, name: str = "mock", latency: float = 0.5, seed: Optional[int] = None):
        super().__init__(name)
        self.latency = latency
        self._random = random.Random(seed)
        self.reasons = [
            "Horses 3 and 5 have been absent for several races and look overdue.",
            "Recent frequency favors the watched horses; repeating 1-3-1 style pattern detected.",
            "No dominant pattern; recommendation based on overall win frequency.",
        ]

    async def generate_json(self, prompt: str, response_schema: Dict[str, Any],
                            temperature: float) -> str:
        """Generate a mock structured reply"""
        if self.latency > 0:
            await asyncio.sleep(self.latency)  # Simulate latency

        self.total_requests += 1
        self.last_request_time = time.time()

        return json.dumps({
            "confidence": self._random.randint(50, 95),
            "recommended_horses": sorted(self._random.sample(range(1, 7), 3)),
            "reasoning": self._random.choice(self.reasons),
        })


class GoogleEngine(LLMEngine):
    """Google Gemini engine"""

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash"):
        super().__init__("google", api_key)
        self.model_name = model_name
        self.client = None

    def _get_client(self):
        """Lazy initialization of Google client"""
        if self.client is None:
            import google.generativeai as genai
            genai.configure(api_key=self.api_key)
            self.client = genai.GenerativeModel(self.model_name)
        return self.client

    async def generate_json(self, prompt: str, response_schema: Dict[str, Any],
                            temperature: float) -> str:
        """Generate a structured reply using Google Gemini"""
        import google.generativeai as genai

        try:
            model = self._get_client()
            response = await model.generate_content_async(
                prompt,
                generation_config=genai.GenerationConfig(
                    response_mime_type="application/json",
                    response_schema=response_schema,
                    temperature=temperature,
                ),
            )
        except Exception as e:
            logger.error(f"Google API error: {e}")
            self.error_count += 1
            raise

        self.total_requests += 1
        self.last_request_time = time.time()

        try:
            return response.text
        except ValueError as e:
            # blocked or empty candidate
            raise MalformedResponseError(f"Gemini returned no text: {e}") from e

    async def close(self):
        """Drop the model handle"""
        self.client = None
        await super().close()


def create_engine(config: Optional[Settings] = None) -> LLMEngine:
    """Build the single engine used for the lifetime of a session"""
    config = config or default_settings
    if config.use_real_llm:
        if not config.gemini_api_key:
            raise RuntimeError("use_real_llm is set but no Gemini API key is configured")
        logger.info(f"Using Gemini engine ({config.gemini_model})")
        return GoogleEngine(config.gemini_api_key, config.gemini_model)
    logger.info("Using mock engine")
    return MockEngine(latency=config.mock_latency)
