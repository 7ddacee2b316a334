"""
Inference Client - structured request/response contract with the inference service
"""

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from .errors import InferenceError, MalformedResponseError, TransportError
from .gate import AnalysisRequest
from .llm_engines import LLMEngine
from .schemas import PREDICTION_RESPONSE_SCHEMA, Prediction
from .settings import settings

logger = logging.getLogger(__name__)


class InferenceClient:
    """Sends analysis requests and validates replies. No retries."""

    def __init__(self, engine: LLMEngine, temperature: Optional[float] = None,
                 timeout: Optional[float] = None):
        self.engine = engine
        self.temperature = settings.temperature if temperature is None else temperature
        self.timeout = settings.request_timeout if timeout is None else timeout

    async def infer(self, request: AnalysisRequest) -> Prediction:
        """Run one analysis call.

        Raises TransportError when the service cannot be reached or fails, and
        MalformedResponseError when the reply does not match the prediction
        shape.
        """
        try:
            text = await asyncio.wait_for(
                self.engine.generate_json(
                    request.instructions, PREDICTION_RESPONSE_SCHEMA, self.temperature
                ),
                timeout=self.timeout,
            )
        except InferenceError:
            raise
        except asyncio.TimeoutError as e:
            raise TransportError(f"{self.engine.name} timed out after {self.timeout}s") from e
        except Exception as e:
            raise TransportError(f"{self.engine.name} request failed: {e}") from e

        return self.parse(text)

    @staticmethod
    def parse(text) -> Prediction:
        """Validate a raw JSON reply against the prediction shape"""
        if not isinstance(text, (str, bytes)):
            raise MalformedResponseError(f"expected JSON text, got {type(text).__name__}")
        try:
            return Prediction.model_validate_json(text)
        except ValidationError as e:
            raise MalformedResponseError(f"invalid prediction payload: {e.error_count()} error(s)") from e

    async def aclose(self):
        """Tear down the underlying engine"""
        await self.engine.close()
