"""
Confidence arbitration for competing detections.

The recognition service can report the same field several times (two
"total_amount" entities, a "vendor_name" and a "merchant_name", ...).
The arbiter keeps the first detection and replaces it only with a strictly
more confident one, so ties go to the earliest detection.
"""

from typing import Any, Optional

from expense_scan.models.receipt import ReceiptData
from expense_scan.utils.entity_types import CanonicalField, ARBITRATED_FIELDS

__all__ = [
    'ConfidenceArbiter', 'should_accept',
    'confidence_level', 'is_low_confidence',
    'HIGH_CONFIDENCE', 'MEDIUM_CONFIDENCE',
]

# Confidence level boundaries
HIGH_CONFIDENCE = 0.9
MEDIUM_CONFIDENCE = 0.7


def should_accept(
    current_value: Any,
    current_confidence: Optional[float],
    confidence: Optional[float]
) -> bool:
    """
    Decide whether a new detection replaces the current field value.

    Accepts when the field holds no value yet, or when the new confidence is
    strictly greater than the recorded one. "No value" is a falsy check:
    a total of 0 or an empty string does not hold the field.

    Args:
        current_value: Value currently stored for the field
        current_confidence: Confidence recorded for that value (None = 0)
        confidence: Confidence of the new detection (None = 0)

    Returns:
        True if the new detection should be stored
    """
    if not current_value:
        return True
    return (confidence or 0.0) > (current_confidence or 0.0)


class ConfidenceArbiter:
    """Applies the acceptance rule to a receipt under construction."""

    def __init__(self, receipt: ReceiptData):
        self.receipt = receipt

    def offer(self, field: CanonicalField, value: Any, confidence: Optional[float]) -> bool:
        """
        Offer a resolved value for an arbitrated field.

        On acceptance both the value and confidence_scores[field] are
        overwritten, so the recorded confidence always belongs to the
        stored value.

        Returns:
            True if the value was stored
        """
        if field not in ARBITRATED_FIELDS:
            raise ValueError(f"{field.value} is not an arbitrated field")

        key = field.value
        current = getattr(self.receipt, key)
        if not should_accept(current, self.receipt.confidence_scores.get(key), confidence):
            return False

        setattr(self.receipt, key, value)
        self.receipt.confidence_scores[key] = confidence or 0.0
        return True


def confidence_level(confidence: float) -> str:
    """
    Classify a confidence score.

    Returns:
        'high' (>= 0.9), 'medium' (>= 0.7) or 'low'
    """
    if confidence >= HIGH_CONFIDENCE:
        return 'high'
    if confidence >= MEDIUM_CONFIDENCE:
        return 'medium'
    return 'low'


def is_low_confidence(confidence: float, threshold: float = HIGH_CONFIDENCE) -> bool:
    """True for a recorded (non-zero) confidence below threshold."""
    return 0 < confidence < threshold
