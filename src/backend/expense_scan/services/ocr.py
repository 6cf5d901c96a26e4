"""
Recognition service for sending receipt images to Document AI.
"""

import logging
from typing import Optional

from google.api_core.client_options import ClientOptions
from google.api_core.exceptions import GoogleAPICallError
from google.cloud import documentai

from expense_scan.config import settings
from expense_scan.models.receipt import RecognizedDocument

logger = logging.getLogger(__name__)


class RecognitionError(Exception):
    """Recognition service call failed."""


class NoDocumentError(RecognitionError):
    """Recognition service answered without a document."""

    def __init__(self, message: str = "No document returned from Document AI"):
        super().__init__(message)


class DocumentAIService:
    """Service for running the Document AI Expense Parser on receipt images."""

    def __init__(self, client: Optional[documentai.DocumentProcessorServiceClient] = None):
        """
        Initialize the Document AI client.

        Args:
            client: Pre-built client (tests); by default one is created for
                the configured location's regional endpoint
        """
        if client is None:
            options = ClientOptions(
                api_endpoint=f"{settings.DOCUMENT_AI_LOCATION}-documentai.googleapis.com"
            )
            client = documentai.DocumentProcessorServiceClient(client_options=options)

        self.client = client
        self.processor_name = documentai.DocumentProcessorServiceClient.processor_path(
            settings.GOOGLE_CLOUD_PROJECT,
            settings.DOCUMENT_AI_LOCATION,
            settings.PROCESSOR_ID,
        )

    def process(self, image_data: bytes, mime_type: str = "image/jpeg") -> RecognizedDocument:
        """
        Run the processor on raw image bytes.

        Args:
            image_data: Raw image bytes (JPEG, PNG, PDF, ...)
            mime_type: MIME type of image_data

        Returns:
            RecognizedDocument with the detected entities

        Raises:
            NoDocumentError: The processor returned no document
            RecognitionError: The API call failed
        """
        request = documentai.ProcessRequest(
            name=self.processor_name,
            raw_document=documentai.RawDocument(content=image_data, mime_type=mime_type),
        )

        logger.info("Processing receipt with Document AI", extra={
            "processor": self.processor_name,
            "mime_type": mime_type,
            "size_bytes": len(image_data),
        })

        try:
            result = self.client.process_document(
                request=request,
                timeout=settings.DOCUMENT_AI_TIMEOUT,
            )
        except GoogleAPICallError as e:
            raise RecognitionError(f"Document AI request failed: {e.message}") from e

        if "document" not in result:
            raise NoDocumentError()

        document = RecognizedDocument.model_validate(
            documentai.Document.to_dict(result.document)
        )

        logger.debug("Document AI returned entities", extra={
            "entity_count": len(document.entities or []),
        })

        return document


class DemoRecognitionService:
    """
    Offline stand-in for DocumentAIService.

    Returns the same small grocery receipt for every image so the API can be
    exercised without cloud credentials (DEMO_MODE=true).
    """

    DEMO_DOCUMENT = {
        "text": "JAYA GROCER\nFresh Salmon 45.00\nOrganic Milk 2 x 12.50\nTOTAL RM 70.00",
        "entities": [
            {"type": "supplier_name", "mentionText": "JAYA GROCER", "confidence": 0.97},
            {"type": "supplier_type", "mentionText": "Grocery", "confidence": 0.81},
            {
                "type": "receipt_date",
                "mentionText": "12/03/2024",
                "confidence": 0.94,
                "normalizedValue": {"dateValue": {"year": 2024, "month": 3, "day": 12}},
            },
            {
                "type": "total_amount",
                "mentionText": "RM 70.00",
                "confidence": 0.96,
                "normalizedValue": {"moneyValue": {"units": "70", "nanos": 0, "currencyCode": "MYR"}},
            },
            {
                "type": "line_item",
                "mentionText": "Fresh Salmon 45.00",
                "confidence": 0.9,
                "properties": [
                    {"type": "line_item/description", "mentionText": "Fresh Salmon", "confidence": 0.92},
                    {"type": "line_item/amount", "mentionText": "45.00", "confidence": 0.9},
                ],
            },
            {
                "type": "line_item",
                "mentionText": "Organic Milk 2 x 12.50",
                "confidence": 0.88,
                "properties": [
                    {"type": "line_item/description", "mentionText": "Organic Milk", "confidence": 0.9},
                    {"type": "line_item/quantity", "mentionText": "2", "confidence": 0.85},
                    {"type": "line_item/unit_price", "mentionText": "12.50", "confidence": 0.86},
                    {"type": "line_item/amount", "mentionText": "25.00", "confidence": 0.88},
                ],
            },
        ],
    }

    def process(self, image_data: bytes, mime_type: str = "image/jpeg") -> RecognizedDocument:
        logger.info("DEMO_MODE: returning canned receipt", extra={"mime_type": mime_type})
        return RecognizedDocument.model_validate(self.DEMO_DOCUMENT)


def get_recognition_service():
    """Recognition service for the current settings."""
    if settings.DEMO_MODE:
        return DemoRecognitionService()
    return DocumentAIService()
