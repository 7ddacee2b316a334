"""
Recommendation Filter - confidence gate for surfacing a prediction
"""

from typing import Optional

from .schemas import Prediction

CONFIDENCE_THRESHOLD = 75


def filter_prediction(prediction: Prediction) -> Optional[Prediction]:
    """Return the prediction unchanged if confident enough, else None"""
    if prediction.confidence >= CONFIDENCE_THRESHOLD:
        return prediction
    return None
