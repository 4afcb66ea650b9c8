"""
Google Gemini client for FeatherGuard

Sends a bird photo plus an instruction to the Generative Language API and
returns the model's free-text answer.

API Documentation: https://ai.google.dev/api/generate-content
"""

import base64
import logging
from typing import Any, Dict, Optional

import httpx

from featherguard.core.exceptions import ClassificationError
from featherguard.core.models import PhotoUpload

logger = logging.getLogger(__name__)


class GeminiClassifier:
    """
    Image classification through Gemini `generateContent`.

    Usage:
        async with GeminiClassifier(api_key="your_key") as classifier:
            text = await classifier.classify(photo, "What bird is this?")
    """

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.0-flash",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Google AI Studio key; without one every call fails
            model: Model name
            timeout: HTTP request timeout in seconds
            client: Pre-built httpx client (tests inject a mock transport)
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _build_payload(self, photo: PhotoUpload, instruction: str) -> Dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": instruction},
                        {
                            "inline_data": {
                                "mime_type": photo.content_type,
                                "data": base64.b64encode(photo.data).decode("ascii"),
                            }
                        },
                    ]
                }
            ]
        }

    def _extract_text(self, data: Any) -> str:
        """Concatenate the text parts of the first candidate."""
        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            block_reason = data.get("promptFeedback", {}).get("blockReason") if isinstance(data, dict) else None
            if block_reason:
                raise ClassificationError(f"Request blocked: {block_reason}") from e
            raise ClassificationError(f"Malformed response: {e}") from e

        if not text.strip():
            raise ClassificationError("Empty response")

        return text

    async def classify(self, photo: PhotoUpload, instruction: str) -> str:
        """
        Ask the model about a photo.

        Args:
            photo: Image bytes and MIME type
            instruction: Prompt sent before the image

        Returns:
            Raw answer text

        Raises:
            ClassificationError: On missing key, transport/HTTP errors or
                an unusable response
        """
        if not self.is_configured:
            raise ClassificationError("Gemini API key not configured")

        url = f"{self.BASE_URL}/{self.model}:generateContent"

        logger.info(f"Classifying {photo.filename} ({photo.size} bytes) with {self.model}")

        try:
            response = await self._client.post(
                url,
                json=self._build_payload(photo, instruction),
                headers={"x-goog-api-key": self.api_key},
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ClassificationError(f"Gemini request failed: {e}") from e

        return self._extract_text(data)
