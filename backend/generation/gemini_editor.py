"""
Gemini image-edit client for the mask-edit pipeline.

Sends the letterboxed room photo, the wall mask and an edit prompt to a
Gemini image-output model over the REST API and returns the edited image.
"""

import asyncio
import base64
import os
from typing import Any, Dict, Optional

import httpx


GEMINI_EDIT_CONFIG = {
    "model": "gemini-2.0-flash-preview-image-generation",
    "temperature": 0.2,
    "top_k": 30,
    "top_p": 0.8,
}

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

MASK_INSTRUCTIONS = (
    "The second image is a mask: only change pixels where the mask is transparent. "
    "Return a single edited image with exactly the same framing as the first image."
)


class GeminiAPIError(Exception):
    """Non-200 HTTP response from the Gemini REST API."""

    def __init__(self, status_code: int, detail: str = ""):
        super().__init__(f"API error {status_code}: {detail}")
        self.status_code = status_code


def extract_inline_image(data: Dict[str, Any]) -> Optional[bytes]:
    """Pull the first inline image out of a generateContent response."""
    for candidate in data.get("candidates") or []:
        parts = (candidate.get("content") or {}).get("parts") or []
        for part in parts:
            inline_data = part.get("inlineData") or part.get("inline_data")
            if inline_data and inline_data.get("data"):
                return base64.b64decode(inline_data["data"])
    return None


class GeminiImageEditor:
    """
    Client for masked image edits using a Gemini image model.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        max_retries: int = 5,
        retry_delay_ms: int = 5000,
        timeout: float = 180.0,
    ):
        """
        Initialize the Gemini edit client.

        Args:
            api_key: Gemini API key (or set GEMINI_API_KEY env var)
            model_name: Image-output model (defaults to GEMINI_EDIT_CONFIG)
            max_retries: Maximum retry attempts for transient errors
            retry_delay_ms: Delay between retries in milliseconds
            timeout: HTTP timeout in seconds
        """
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY not set")

        self.model_name = model_name or GEMINI_EDIT_CONFIG["model"]
        self.max_retries = max_retries
        self.retry_delay_ms = retry_delay_ms
        self.timeout = timeout

    def _is_retryable_error(self, error: Exception) -> bool:
        """Check if the error is retryable (rate limits, server errors, timeouts)."""
        if isinstance(error, GeminiAPIError):
            return error.status_code == 429 or error.status_code >= 500
        if isinstance(error, httpx.TransportError):
            return True
        message = str(error).lower()
        retryable_codes = ["429", "resource_exhausted", "500", "502", "503", "504"]
        return any(code in message for code in retryable_codes)

    def _build_payload(self, image_bytes: bytes, mask_bytes: Optional[bytes], prompt: str) -> Dict[str, Any]:
        parts = [{
            "inlineData": {
                "mimeType": "image/png",
                "data": base64.b64encode(image_bytes).decode('utf-8'),
            }
        }]
        text = prompt
        if mask_bytes:
            parts.append({
                "inlineData": {
                    "mimeType": "image/png",
                    "data": base64.b64encode(mask_bytes).decode('utf-8'),
                }
            })
            text = f"{MASK_INSTRUCTIONS}\n\n{prompt}"
        parts.append({"text": text})

        return {
            "contents": [{"parts": parts}],
            "generationConfig": {
                "responseModalities": ["TEXT", "IMAGE"],
                "temperature": GEMINI_EDIT_CONFIG["temperature"],
                "topK": GEMINI_EDIT_CONFIG["top_k"],
                "topP": GEMINI_EDIT_CONFIG["top_p"],
            },
        }

    async def edit_image(
        self,
        image_bytes: bytes,
        mask_bytes: Optional[bytes],
        prompt: str,
    ) -> Optional[bytes]:
        """
        Edit an image, optionally restricted to a mask.

        Args:
            image_bytes: PNG bytes of the image to edit
            mask_bytes: PNG mask, transparent where edits are allowed
            prompt: Edit instructions

        Returns:
            Edited image bytes, or None if the model returned no image

        Raises:
            GeminiAPIError: Non-retryable HTTP errors, or the last error after retries
        """
        url = GEMINI_API_URL.format(model=self.model_name)
        payload = self._build_payload(image_bytes, mask_bytes, prompt)

        last_error = None

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(
                        url,
                        params={"key": self.api_key},
                        json=payload,
                        headers={"Content-Type": "application/json"},
                    )
            except Exception as e:
                last_error = e

                if not self._is_retryable_error(e):
                    raise

                print(f"[WARN] Gemini edit error (attempt {attempt + 1}): {e}")
            else:
                if response.status_code == 200:
                    image = extract_inline_image(response.json())
                    if image is None:
                        print("[WARN] Gemini edit returned no image")
                    return image

                last_error = GeminiAPIError(response.status_code, response.text[:500])

                if not self._is_retryable_error(last_error):
                    raise last_error

                print(f"[WARN] Gemini edit got {response.status_code}, retrying ({attempt + 1}/{self.max_retries})")

            if attempt < self.max_retries - 1:
                delay_sec = self.retry_delay_ms / 1000
                print(f"[INFO] Retrying in {delay_sec}s...")
                await asyncio.sleep(delay_sec)

        raise last_error or Exception("Failed after all retries")
