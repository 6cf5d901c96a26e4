"""
Receipt parser service for turning recognition entities into a receipt record.
"""

import logging
from typing import Optional, Dict, Any, List, Iterable, Union

from expense_scan.models.receipt import (
    DetectedEntity,
    LineItem,
    ReceiptData,
    RecognizedDocument,
)
from expense_scan.utils.entity_types import (
    CanonicalField,
    LineItemField,
    classify_entity,
    classify_line_item_property,
)
from expense_scan.utils.money import resolve_money, parse_amount, parse_quantity
from expense_scan.utils.dates import resolve_date
from expense_scan.utils.scoring import ConfidenceArbiter

logger = logging.getLogger(__name__)

EntityLike = Union[DetectedEntity, Dict[str, Any]]


def _clean_text(value: Optional[str]) -> Optional[str]:
    """Trim text; empty becomes None."""
    if not value:
        return None
    return value.strip() or None


class ReceiptParser:
    """Service for composing a ReceiptData record from detected entities."""

    # Below this a supplier or total is flagged for manual review
    REVIEW_CONFIDENCE_THRESHOLD = 0.7

    def parse_document(self, document: Optional[Union[RecognizedDocument, Dict[str, Any]]]) -> ReceiptData:
        """
        Parse a recognized document.

        A document without entities (or with entities=None) yields an
        empty record.
        """
        if document is None:
            return ReceiptData()
        if not isinstance(document, RecognizedDocument):
            document = RecognizedDocument.model_validate(document)
        return self.parse(document.entities)

    def parse(self, entities: Optional[Iterable[EntityLike]]) -> ReceiptData:
        """
        Compose a receipt record from detected entities in a single pass.

        Each entity is classified by its type label, its value resolved
        (structured value first, then free text), and the result stored
        according to the field's rule:
        - total/supplier/date/currency: confidence arbitration
        - supplier type: last writer wins
        - line items: appended in encounter order when usable

        Args:
            entities: Entities from the recognition service (models or dicts)

        Returns:
            ReceiptData; never raises on unparsable text
        """
        receipt = ReceiptData()
        if not entities:
            return receipt

        arbiter = ConfidenceArbiter(receipt)
        skipped = 0

        for raw_entity in entities:
            entity = self._coerce_entity(raw_entity)
            field = classify_entity(entity.type)

            if field is None:
                skipped += 1
                continue

            confidence = entity.confidence or 0.0

            if field is CanonicalField.TOTAL:
                parsed = resolve_money(entity.mention_text, entity.money_value)
                accepted = arbiter.offer(field, parsed.amount, confidence)
                # Currency rides along with the total; it does not get a confidence entry
                if accepted and parsed.currency_code and not receipt.currency:
                    receipt.currency = parsed.currency_code

            elif field is CanonicalField.SUPPLIER:
                arbiter.offer(field, _clean_text(entity.mention_text), confidence)

            elif field is CanonicalField.SUPPLIER_TYPE:
                supplier_type = _clean_text(entity.mention_text)
                receipt.supplier_type = supplier_type.lower() if supplier_type else None

            elif field is CanonicalField.DATE:
                arbiter.offer(field, resolve_date(entity.mention_text, entity.date_value), confidence)

            elif field is CanonicalField.CURRENCY:
                currency = _clean_text(entity.mention_text)
                arbiter.offer(field, currency.upper() if currency else None, confidence)

            elif field is CanonicalField.LINE_ITEM:
                line_item = self.extract_line_item(entity)
                if line_item is not None:
                    receipt.line_items.append(line_item)

        logger.debug("Parsed receipt entities", extra={
            "skipped_entities": skipped,
            "line_items": len(receipt.line_items),
            "confidence_scores": dict(receipt.confidence_scores),
        })

        return receipt

    def extract_line_item(self, entity: EntityLike) -> Optional[LineItem]:
        """
        Assemble a line item from a line_item entity's sub-properties.

        Unit price and amount are always parsed from text, never from
        structured values. Later sub-properties overwrite earlier ones.

        Returns:
            LineItem, or None when neither description nor amount was found
        """
        entity = self._coerce_entity(entity)
        line_item = LineItem()

        for prop in entity.properties:
            slot = classify_line_item_property(prop.type)
            text = prop.mention_text

            if slot is LineItemField.DESCRIPTION:
                line_item.description = _clean_text(text)
            elif slot is LineItemField.QUANTITY:
                line_item.quantity = parse_quantity(text)
            elif slot is LineItemField.UNIT_PRICE:
                line_item.unit_price = parse_amount(text).amount
            elif slot is LineItemField.AMOUNT:
                line_item.amount = parse_amount(text).amount

        if line_item.description is None and line_item.amount is None:
            return None

        return line_item

    def review_reasons(self, receipt: ReceiptData) -> List[str]:
        """
        List reasons a parsed receipt should be checked by the user.

        Flags missing supplier/total/date and low-confidence supplier or
        total. An empty list means the receipt can be saved as-is.
        """
        reasons = []

        if receipt.supplier_name is None:
            reasons.append("missing supplier")
        if receipt.total_amount is None:
            reasons.append("missing total")
        if receipt.receipt_date is None:
            reasons.append("missing date")

        for field, label in (
            (CanonicalField.SUPPLIER, "supplier"),
            (CanonicalField.TOTAL, "total"),
        ):
            score = receipt.confidence_scores.get(field.value)
            if score is not None and score < self.REVIEW_CONFIDENCE_THRESHOLD:
                reasons.append(f"low {label} confidence ({score:.2f})")

        return reasons

    def requires_review(self, receipt: ReceiptData) -> bool:
        return bool(self.review_reasons(receipt))

    @staticmethod
    def _coerce_entity(entity: EntityLike) -> DetectedEntity:
        if isinstance(entity, DetectedEntity):
            return entity
        return DetectedEntity.model_validate(entity)
