"""OpenAI chat-completions provider implementation."""

import base64
import os
from collections.abc import Sequence

import openai
from openai import OpenAI

from product_lens.exceptions import AuthenticationError, ProviderError, RateLimitError
from product_lens.providers.base import BaseProvider, ImageInput, encode_image


class OpenAIProvider(BaseProvider):
    """OpenAI chat-completions provider with inline base64 images."""

    name = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        *,
        timeout_sec: float | None = None,
        client=None,
    ):
        self.model = model
        if client is not None:
            self.client = client
            return

        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not self.api_key:
            raise AuthenticationError(
                "No API key provided. Set OPENAI_API_KEY environment variable "
                "or pass api_key parameter."
            )
        # Each call is attempted once.
        kwargs = {"api_key": self.api_key, "max_retries": 0}
        if timeout_sec:
            kwargs["timeout"] = timeout_sec
        self.client = OpenAI(**kwargs)

    def _user_content(self, prompt: str, images: Sequence[ImageInput]) -> str | list[dict]:
        if not images:
            return prompt
        content: list[dict] = [{"type": "text", "text": prompt}]
        for image in images:
            payload, mime_type = encode_image(image)
            b64 = base64.b64encode(payload).decode("ascii")
            content.append({"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{b64}"}})
        return content

    def generate_json(
        self,
        prompt: str,
        *,
        images: Sequence[ImageInput] = (),
        system_instruction: str | None = None,
        temperature: float | None = None,
    ) -> str:
        messages: list[dict] = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": self._user_content(prompt, images)})

        kwargs = {}
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                response_format={"type": "json_object"},
                messages=messages,
                **kwargs,
            )
        except openai.RateLimitError as e:
            raise RateLimitError(f"API rate limit exceeded: {e}") from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise AuthenticationError(f"Invalid API key: {e}") from e
        except Exception as e:
            raise ProviderError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
