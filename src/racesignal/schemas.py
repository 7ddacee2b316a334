"""Pydantic models for Race Signal."""

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, conint


class Prediction(BaseModel):
    """Structured reply of one successful analysis."""
    model_config = ConfigDict(strict=True, frozen=True, populate_by_name=True)

    confidence: conint(ge=0, le=100)
    recommended_values: Tuple[conint(ge=1, le=6), ...] = Field(
        alias="recommended_horses", min_length=3, max_length=3
    )
    reasoning: str


# Structured-output contract sent to the inference service
PREDICTION_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "confidence": {
            "type": "INTEGER",
            "description": "Confidence score from 0 to 100 based on pattern strength.",
        },
        "recommended_horses": {
            "type": "ARRAY",
            "items": {"type": "INTEGER"},
            "description": "Exactly 3 recommended horses to bet on.",
        },
        "reasoning": {
            "type": "STRING",
            "description": "Short explanation of why these horses were chosen (trends, missing, frequency).",
        },
    },
    "required": ["confidence", "recommended_horses", "reasoning"],
}


class OutcomeIn(BaseModel):
    """Input schema for recording a winner."""
    value: int = Field(..., ge=1, le=6)


class OutcomeOut(BaseModel):
    id: str
    value: int
    observed_at: datetime


class PredictionOut(BaseModel):
    confidence: int
    recommended_horses: List[int]
    reasoning: str


class StateOut(BaseModel):
    """Read-only view of the session for rendering."""
    history: List[OutcomeOut]
    busy: bool
    current_prediction: Optional[PredictionOut] = None
    prediction_visible: bool
    notice: Optional[str] = None
