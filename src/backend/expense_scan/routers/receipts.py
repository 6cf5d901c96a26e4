"""
Receipts API router for parsing receipt images.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import base64
import logging

from expense_scan.config import settings
from expense_scan.models.receipt import ParseReceiptRequest, ReviewStatus
from expense_scan.services.expense import get_expense_service

router = APIRouter(prefix="/api", tags=["receipts"])
logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Failure envelope shared by all receipt endpoints."""
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@router.post("/parse-receipt")
def parse_receipt(body: ParseReceiptRequest):
    """
    Parse a base64-encoded receipt image.

    Body:
        image: Base64 image bytes (required)
        mimeType: MIME type, defaults to image/jpeg
        includeRaw: Echo the recognized entities under "raw"

    Returns:
        {success: true, data: <receipt>, review: {...}} on success,
        {success: false, error: <message>} with 400/413/500 on failure
    """
    if not body.image:
        return error_response(400, "Missing image data")

    # Base64 inflates by 4/3
    approx_size_mb = len(body.image) * 3 / 4 / (1024 * 1024)
    if approx_size_mb > settings.MAX_IMAGE_MB:
        return error_response(
            413,
            f"Image too large: {approx_size_mb:.2f}MB. Maximum: {settings.MAX_IMAGE_MB}MB"
        )

    try:
        image_data = base64.b64decode(body.image)
        mime_type = body.mime_type or settings.DEFAULT_MIME_TYPE

        service = get_expense_service()
        document, receipt = service.parse_receipt(image_data, mime_type)
        reasons = service.parser.review_reasons(receipt)

    except Exception as e:
        logger.error("Error in parse-receipt", exc_info=True, extra={
            "mime_type": body.mime_type,
            "error": str(e),
        })
        return error_response(500, str(e))

    payload = {
        "success": True,
        "data": receipt.model_dump(),
        "review": ReviewStatus(needs_review=bool(reasons), reasons=reasons).model_dump(),
    }
    if body.include_raw:
        payload["raw"] = document.raw_summary()

    return payload
