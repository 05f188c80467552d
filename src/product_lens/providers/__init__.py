"""Providers for product-lens."""

from product_lens.providers.base import BaseProvider, ImageInput
from product_lens.providers.gemini import GeminiProvider
from product_lens.providers.openai_chat import OpenAIProvider

__all__ = ["BaseProvider", "GeminiProvider", "ImageInput", "OpenAIProvider"]
