"""Custom exceptions for product-lens."""


class ProductLensError(Exception):
    """Base exception for product-lens."""

    pass


class AuthenticationError(ProductLensError):
    """Raised when API key is invalid or missing."""

    pass


class RateLimitError(ProductLensError):
    """Raised when API rate limit is exceeded."""

    pass


class ProviderError(ProductLensError):
    """Raised when the model provider call fails for any other reason."""

    pass


class ImageError(ProductLensError):
    """Raised when image cannot be read or is invalid."""

    pass


class MissingImageError(ImageError):
    """Raised when an analysis is requested without any image."""

    pass
