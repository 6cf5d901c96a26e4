"""
Entity type classification.

Maps the recognition service's free-text entity labels onto the closed set
of canonical receipt fields. Labels are matched case-insensitively; anything
not listed here is ignored by the parser.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional


class CanonicalField(str, Enum):
    """Canonical receipt fields. Values double as output field names."""
    TOTAL = "total_amount"
    SUPPLIER = "supplier_name"
    SUPPLIER_TYPE = "supplier_type"
    DATE = "receipt_date"
    CURRENCY = "currency"
    LINE_ITEM = "line_items"


class LineItemField(str, Enum):
    """Slots of a single line item."""
    DESCRIPTION = "description"
    QUANTITY = "quantity"
    UNIT_PRICE = "unit_price"
    AMOUNT = "amount"


FIELD_SYNONYMS: Dict[str, CanonicalField] = {
    'total_amount': CanonicalField.TOTAL,
    'total': CanonicalField.TOTAL,
    'net_amount': CanonicalField.TOTAL,

    'supplier_name': CanonicalField.SUPPLIER,
    'vendor_name': CanonicalField.SUPPLIER,
    'merchant_name': CanonicalField.SUPPLIER,
    'receiver_name': CanonicalField.SUPPLIER,

    'supplier_type': CanonicalField.SUPPLIER_TYPE,
    'merchant_type': CanonicalField.SUPPLIER_TYPE,

    'receipt_date': CanonicalField.DATE,
    'transaction_date': CanonicalField.DATE,
    'purchase_date': CanonicalField.DATE,
    'invoice_date': CanonicalField.DATE,

    'currency': CanonicalField.CURRENCY,

    'line_item': CanonicalField.LINE_ITEM,
}

LINE_ITEM_SYNONYMS: Dict[str, LineItemField] = {
    'line_item/description': LineItemField.DESCRIPTION,
    'line_item/product_code': LineItemField.DESCRIPTION,
    'line_item/quantity': LineItemField.QUANTITY,
    'line_item/unit_price': LineItemField.UNIT_PRICE,
    'line_item/amount': LineItemField.AMOUNT,
}

# Fields chosen by highest confidence; the rest are last-writer-wins or appended
ARBITRATED_FIELDS: FrozenSet[CanonicalField] = frozenset({
    CanonicalField.TOTAL,
    CanonicalField.SUPPLIER,
    CanonicalField.DATE,
    CanonicalField.CURRENCY,
})


def _normalize_label(label: Optional[str]) -> str:
    return label.lower() if isinstance(label, str) else ''


def classify_entity(label: Optional[str]) -> Optional[CanonicalField]:
    """
    Classify an entity type label.

    Examples:
        >>> classify_entity("Vendor_Name")
        <CanonicalField.SUPPLIER: 'supplier_name'>
        >>> classify_entity("supplier_address") is None
        True
    """
    return FIELD_SYNONYMS.get(_normalize_label(label))


def classify_line_item_property(label: Optional[str]) -> Optional[LineItemField]:
    """Classify a line item sub-property label (e.g. 'line_item/quantity')."""
    return LINE_ITEM_SYNONYMS.get(_normalize_label(label))
