"""
Gemini API client for wall analysis.
Sends the uploaded room photo to a Gemini vision model and returns the raw
text response describing the wall region and its estimated size.
"""

import asyncio
import io
import os
from typing import Optional

import google.generativeai as genai
from PIL import Image

from .prompt_templates import get_wall_analysis_prompt


DEFAULT_VISION_MODEL = "gemini-2.0-flash"


class GeminiWallAnalyzer:
    """
    Client for estimating wall bounds and dimensions with Google Gemini.

    Handles:
    - API initialization and authentication
    - The JSON-only wall analysis prompt
    - Retry with linear backoff
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = DEFAULT_VISION_MODEL,
        max_retries: int = 3,
        retry_delay: float = 2.0,
        max_output_tokens: int = 500,
    ):
        """
        Initialize the Gemini client.

        Args:
            api_key: Google AI Studio API key (or set GEMINI_API_KEY env var)
            model_name: Gemini vision model to use
            max_retries: Number of attempts before giving up
            retry_delay: Seconds to wait between retries (multiplied by attempt)
            max_output_tokens: Response length cap
        """
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY environment variable not set")

        self.model_name = model_name
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.max_output_tokens = max_output_tokens

        genai.configure(api_key=self.api_key)
        self.model = genai.GenerativeModel(self.model_name)

    async def analyze_wall(self, image_bytes: bytes, prompt: Optional[str] = None) -> str:
        """
        Ask the model where the main wall is and how big it is.

        Args:
            image_bytes: Encoded room photo
            prompt: Optional user prompt, appended as context

        Returns:
            Raw response text (expected to contain a JSON object)

        Raises:
            Exception: The last API error once all retries are exhausted
        """
        full_prompt = get_wall_analysis_prompt(prompt)
        image = Image.open(io.BytesIO(image_bytes))
        image.load()

        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries):
            try:
                response = await asyncio.to_thread(
                    self.model.generate_content,
                    [full_prompt, image],
                    generation_config=genai.types.GenerationConfig(
                        candidate_count=1,
                        temperature=0.2,
                        max_output_tokens=self.max_output_tokens,
                    )
                )
                text = response.text or ""
                print(f"[INFO] Wall analysis: {text[:300]}")
                return text

            except Exception as e:
                last_error = e
                print(f"[WARN] Wall analysis failed (attempt {attempt + 1}/{self.max_retries}): {e}")
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(self.retry_delay * (attempt + 1))

        raise last_error or Exception("Wall analysis failed after all retries")
