"""Gemini provider implementation."""

import os
from collections.abc import Sequence

from google import genai
from google.genai import errors, types

from product_lens.exceptions import AuthenticationError, ProviderError, RateLimitError
from product_lens.providers.base import BaseProvider, ImageInput, load_image


class GeminiProvider(BaseProvider):
    """Gemini API provider."""

    name = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-2.0-flash",
        *,
        timeout_sec: float | None = None,
        client=None,
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Gemini API key. Falls back to GEMINI_API_KEY env var.
            model: Model name to use.
            timeout_sec: Per-request timeout; SDK default when None.
            client: Pre-built client, mainly for tests.

        Raises:
            AuthenticationError: If no API key is provided or found.
        """
        self.model = model
        if client is not None:
            self.client = client
            return

        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise AuthenticationError(
                "No API key provided. Set GEMINI_API_KEY environment variable "
                "or pass api_key parameter."
            )
        http_options = types.HttpOptions(timeout=int(timeout_sec * 1000)) if timeout_sec else None
        self.client = genai.Client(api_key=self.api_key, http_options=http_options)

    def generate_json(
        self,
        prompt: str,
        *,
        images: Sequence[ImageInput] = (),
        system_instruction: str | None = None,
        temperature: float | None = None,
    ) -> str:
        contents = [load_image(image) for image in images]
        contents.append(prompt)

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    system_instruction=system_instruction,
                    temperature=temperature,
                ),
            )
        except errors.ClientError as e:
            message = str(e).lower()
            if getattr(e, "code", None) == 429 or "rate" in message or "quota" in message:
                raise RateLimitError(f"API rate limit exceeded: {e}") from e
            if getattr(e, "code", None) in {401, 403} or "auth" in message or "key" in message:
                raise AuthenticationError(f"Invalid API key: {e}") from e
            raise ProviderError(f"Gemini request failed: {e}") from e
        except Exception as e:
            raise ProviderError(f"Gemini request failed: {e}") from e

        return response.text or ""
