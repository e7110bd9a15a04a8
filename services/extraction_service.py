"""
AI extraction of inventory items from scanned lists, invoices and PDFs.

Uses Claude's vision capabilities to read photographed or scanned
documents into a JSON array of loosely-typed items.
"""

import base64
import json
import re
from typing import Any, Optional
import structlog

import anthropic

from config import settings
from models.reconciliation import ExtractedItem
from exceptions import (
    ExtractionParseError,
    ExtractionUnavailableError,
    UnsupportedFileTypeError,
)

logger = structlog.get_logger(__name__)

PDF_MEDIA_TYPE = "application/pdf"

# Markdown fences Claude sometimes wraps around JSON
_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)


def is_supported_media_type(media_type: Optional[str]) -> bool:
    """Images and PDFs only."""
    if not media_type:
        return False
    return media_type == PDF_MEDIA_TYPE or media_type.startswith("image/")


def parse_extraction_response(response_text: str) -> list[ExtractedItem]:
    """
    Parse Claude's reply into extracted items.

    Tries strict JSON first, then strips markdown fences and retries.
    A JSON value that is not an array yields no items.

    Args:
        response_text: Raw response from Claude

    Returns:
        Items in document order (non-object entries skipped)

    Raises:
        ExtractionParseError: If neither attempt parses
    """
    text = (response_text or "").strip() or "[]"

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("extraction_json_parse_failed", error=str(e))
        cleaned = _FENCE_PATTERN.sub("", text).strip()
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e2:
            logger.error(
                "extraction_json_fallback_failed",
                response_preview=text[:500],
                error=str(e2)
            )
            raise ExtractionParseError(text)

    if not isinstance(data, list):
        logger.warning("extraction_response_not_a_list", response_type=type(data).__name__)
        return []

    return [ExtractedItem.model_validate(entry) for entry in data if isinstance(entry, dict)]


class ExtractionService:
    """
    Extract inventory rows from documents using Claude.

    Handles photos of handwritten lists, supplier invoices and PDFs.
    """

    # System prompt for item extraction
    SYSTEM_PROMPT = """You extract inventory items from warehouse documents (stock counts, delivery notes, supplier invoices). Documents are often in Arabic.

IMPORTANT: Return ONLY a valid JSON array, no markdown, no explanation, no code blocks.

Rules:
1. Extract EVERY single row. Do not skip items. Do not summarize.
2. If quantity is missing, use 0.
3. If code is missing, return an empty string.

Each element has these fields:
- code: product code, SKU or barcode if visible (string)
- name: full name or description of the product (string, required)
- qty: quantity or count (number)
- unit: unit of measure (e.g. PCS, KG, BOX, قطعة, كرتون) if available (string)
- expiryDate: expiry date in YYYY-MM-DD format if available (string)
- price: unit price if available (number)

Example:
[
  {"code": "1001", "name": "سكر أبيض", "qty": 20, "unit": "كيس", "expiryDate": "2025-12-31", "price": 12.5}
]"""

    USER_PROMPT = "Extract all inventory items from this document."

    def __init__(self):
        """Initialize the Claude client when an API key is configured."""
        if settings.extraction_configured:
            self.client = anthropic.Anthropic(api_key=settings.anthropic_api_key)
        else:
            self.client = None

    def _build_content(self, content: bytes, media_type: str) -> list[dict[str, Any]]:
        """Message content blocks for one document."""
        data = base64.b64encode(content).decode("utf-8")
        block_type = "document" if media_type == PDF_MEDIA_TYPE else "image"
        return [
            {
                "type": block_type,
                "source": {
                    "type": "base64",
                    "media_type": media_type,
                    "data": data
                }
            },
            {
                "type": "text",
                "text": self.USER_PROMPT
            }
        ]

    async def extract_items(self, content: bytes, media_type: Optional[str]) -> list[ExtractedItem]:
        """
        Send a document to Claude and return the extracted items.

        Args:
            content: File content as bytes
            media_type: MIME type of the upload (image/* or application/pdf)

        Returns:
            Extracted items, possibly empty

        Raises:
            UnsupportedFileTypeError: If the file is not an image or PDF
            ExtractionUnavailableError: If Claude is not configured or the call fails
            ExtractionParseError: If the reply is not valid JSON
        """
        if not is_supported_media_type(media_type):
            raise UnsupportedFileTypeError(media_type)

        if self.client is None:
            raise ExtractionUnavailableError(
                "AI extraction not available. Set ANTHROPIC_API_KEY environment variable."
            )

        logger.info("extraction_started", media_type=media_type, size=len(content))

        try:
            response = self.client.messages.create(
                model=settings.extraction_model,
                max_tokens=settings.extraction_max_tokens,
                system=self.SYSTEM_PROMPT,
                messages=[{
                    "role": "user",
                    "content": self._build_content(content, media_type)
                }]
            )
        except anthropic.APIError as e:
            logger.error("extraction_api_error", error=str(e))
            raise ExtractionUnavailableError(f"Claude API error: {e}")

        response_text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        logger.debug("extraction_response_received", response_length=len(response_text))

        items = parse_extraction_response(response_text)

        logger.info("extraction_completed", item_count=len(items))

        return items


# Singleton instance
_extraction_service: Optional[ExtractionService] = None


def get_extraction_service() -> ExtractionService:
    """Get or create ExtractionService instance."""
    global _extraction_service
    if _extraction_service is None:
        _extraction_service = ExtractionService()
    return _extraction_service
