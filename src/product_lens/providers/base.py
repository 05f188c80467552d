"""Base provider interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from io import BytesIO
from pathlib import Path

from PIL import Image

from product_lens.exceptions import ImageError

ImageInput = str | Path | bytes | Image.Image

_MIME_TYPES = {"JPEG": "image/jpeg", "PNG": "image/png", "WEBP": "image/webp"}


def load_image(image: ImageInput) -> Image.Image:
    """Load image from various input types."""
    if isinstance(image, Image.Image):
        return image

    if isinstance(image, bytes):
        try:
            return Image.open(BytesIO(image))
        except Exception as e:
            raise ImageError(f"Failed to open image: {e}") from e

    path = Path(image) if isinstance(image, str) else image
    if not path.exists():
        raise ImageError(f"Image file not found: {path}")

    try:
        return Image.open(path)
    except Exception as e:
        raise ImageError(f"Failed to open image: {e}") from e


def encode_image(image: ImageInput) -> tuple[bytes, str]:
    """Return image bytes and their MIME type, re-encoding unusual formats as PNG."""
    pil_image = load_image(image)
    fmt = (pil_image.format or "PNG").upper()
    if fmt not in _MIME_TYPES:
        fmt = "PNG"
    if isinstance(image, bytes) and pil_image.format and pil_image.format.upper() == fmt:
        return image, _MIME_TYPES[fmt]

    try:
        with BytesIO() as buffer:
            pil_image.save(buffer, format=fmt)
            return buffer.getvalue(), _MIME_TYPES[fmt]
    except Exception as e:
        raise ImageError(f"Failed to encode image: {e}") from e


class BaseProvider(ABC):
    """Abstract base class for LLM providers."""

    name: str = "base"
    model: str = ""

    @abstractmethod
    def generate_json(
        self,
        prompt: str,
        *,
        images: Sequence[ImageInput] = (),
        system_instruction: str | None = None,
        temperature: float | None = None,
    ) -> str:
        """Ask the model for a JSON-only reply.

        Args:
            prompt: User instruction.
            images: Optional images sent along with the prompt.
            system_instruction: Optional system-level instruction.
            temperature: Sampling temperature, provider default when None.

        Returns:
            Raw reply text, expected to hold one JSON object.

        Raises:
            ImageError: If an image cannot be loaded
            RateLimitError: If API rate limit is exceeded
            AuthenticationError: If API key is invalid
            ProviderError: For any other failed call
        """
        pass
