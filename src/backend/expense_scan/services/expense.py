"""
Expense service that combines recognition and parsing.
"""

import logging
from typing import Optional, Tuple

from expense_scan.config import settings
from expense_scan.models.receipt import ReceiptData, RecognizedDocument
from expense_scan.services.ocr import get_recognition_service
from expense_scan.services.parser import ReceiptParser

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for turning receipt images into ReceiptData records."""

    def __init__(self, recognizer=None, parser: Optional[ReceiptParser] = None):
        """
        Initialize expense service.

        Args:
            recognizer: Object with process(image_data, mime_type); defaults to
                the service selected by settings (Document AI or demo)
            parser: Receipt parser; a fresh ReceiptParser by default
        """
        self.recognizer = recognizer or get_recognition_service()
        self.parser = parser or ReceiptParser()

    def recognize(self, image_data: bytes, mime_type: Optional[str] = None) -> RecognizedDocument:
        """Run recognition only. Raises NoDocumentError when nothing comes back."""
        return self.recognizer.process(image_data, mime_type or settings.DEFAULT_MIME_TYPE)

    def parse_receipt(
        self, image_data: bytes, mime_type: Optional[str] = None
    ) -> Tuple[RecognizedDocument, ReceiptData]:
        """
        Recognize and parse a receipt image.

        Args:
            image_data: Raw image bytes
            mime_type: MIME type (defaults to settings.DEFAULT_MIME_TYPE)

        Returns:
            (recognized document, parsed receipt record)
        """
        document = self.recognize(image_data, mime_type)
        receipt = self.parser.parse_document(document)

        logger.info("Receipt parsed", extra={
            "supplier_name": receipt.supplier_name,
            "total_amount": receipt.total_amount,
            "currency": receipt.currency,
            "line_items": len(receipt.line_items),
        })

        return document, receipt


def get_expense_service() -> ExpenseService:
    return ExpenseService()
