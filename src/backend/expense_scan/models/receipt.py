"""
Pydantic models for recognition entities and parsed receipts.

Entity models accept both the Document AI REST field names (camelCase)
and the snake_case names produced by the Python client's ``to_dict``.
"""

from pydantic import AliasChoices, BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any


class _RecognitionModel(BaseModel):
    """Base for models parsed from recognition service payloads."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"


class MoneyValue(_RecognitionModel):
    """Structured money value: whole units plus billionths."""
    units: Optional[int] = None
    nanos: Optional[int] = None
    currency_code: Optional[str] = None


class DateValue(_RecognitionModel):
    """Structured calendar date; any component may be missing."""
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None


class NormalizedValue(_RecognitionModel):
    text: Optional[str] = None
    money_value: Optional[MoneyValue] = None
    date_value: Optional[DateValue] = None


class DetectedEntity(_RecognitionModel):
    """One typed, confidence-scored detection from the recognition service."""
    # The Python client's to_dict emits the reserved "type" field as "type_"
    type: Optional[str] = Field(default=None, validation_alias=AliasChoices("type", "type_"))
    mention_text: Optional[str] = None
    confidence: Optional[float] = None
    normalized_value: Optional[NormalizedValue] = None
    properties: List["DetectedEntity"] = Field(default_factory=list)

    @property
    def money_value(self) -> Optional[MoneyValue]:
        return self.normalized_value.money_value if self.normalized_value else None

    @property
    def date_value(self) -> Optional[DateValue]:
        return self.normalized_value.date_value if self.normalized_value else None


class RecognizedDocument(_RecognitionModel):
    """Document returned by the recognition service."""
    text: Optional[str] = None
    entities: Optional[List[DetectedEntity]] = None

    def raw_summary(self) -> Dict[str, Any]:
        """Compact dump of the entities for debugging clients."""
        return {
            "text": self.text,
            "entities": [
                {
                    "type": entity.type,
                    "mention_text": entity.mention_text,
                    "normalized_value": (
                        entity.normalized_value.model_dump(exclude_none=True)
                        if entity.normalized_value else None
                    ),
                    "confidence": entity.confidence,
                }
                for entity in self.entities or []
            ],
        }


class LineItem(BaseModel):
    """One purchased line on the receipt."""
    description: Optional[str] = None
    quantity: Optional[float] = None
    unit_price: Optional[float] = None
    amount: Optional[float] = None


class ReceiptData(BaseModel):
    """Canonical receipt record."""
    total_amount: Optional[float] = None
    supplier_name: Optional[str] = None
    supplier_type: Optional[str] = None
    receipt_date: Optional[str] = None  # YYYY-MM-DD
    currency: Optional[str] = None
    line_items: List[LineItem] = Field(default_factory=list)
    confidence_scores: Dict[str, float] = Field(default_factory=dict)


class ParseReceiptRequest(_RecognitionModel):
    """Body of POST /api/parse-receipt."""
    image: Optional[str] = None  # Base64-encoded image bytes
    mime_type: Optional[str] = None
    include_raw: bool = False


class ReviewStatus(BaseModel):
    needs_review: bool
    reasons: List[str] = Field(default_factory=list)
