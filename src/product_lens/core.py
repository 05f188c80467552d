"""Core analysis pipeline: extraction, enrichment, catalog merge."""

import logging
from collections.abc import Sequence
from pathlib import Path

from PIL import Image

from product_lens.catalog import CatalogQuery, get_catalog
from product_lens.config import AnalysisConfig
from product_lens.exceptions import MissingImageError, ProductLensError
from product_lens.merge import merge_result
from product_lens.prompts import ENRICHMENT_SYSTEM_INSTRUCTION, EXTRACTION_PROMPT, build_enrichment_prompt
from product_lens.providers.base import BaseProvider, ImageInput, load_image
from product_lens.schema import EnrichmentResult, ExtractionResult, MergedResult
from product_lens.validation import parse_enrichment, parse_extraction

logger = logging.getLogger(__name__)

ImagesInput = ImageInput | Sequence[ImageInput]


def _provider_kwargs(config: AnalysisConfig) -> dict:
    kwargs: dict = {"timeout_sec": config.timeout_sec}
    if config.model:
        kwargs["model"] = config.model
    return kwargs


def _build_gemini_provider(api_key: str | None, config: AnalysisConfig) -> BaseProvider:
    from product_lens.providers.gemini import GeminiProvider

    return GeminiProvider(api_key=api_key, **_provider_kwargs(config))


def _build_openai_provider(api_key: str | None, config: AnalysisConfig) -> BaseProvider:
    from product_lens.providers.openai_chat import OpenAIProvider

    return OpenAIProvider(api_key=api_key, **_provider_kwargs(config))


def _select_provider(provider: str | None, api_key: str | None, config: AnalysisConfig) -> BaseProvider:
    provider_name = (provider or config.provider).strip().lower()
    if provider_name in {"gemini", "google"}:
        return _build_gemini_provider(api_key, config)
    if provider_name in {"openai", "gpt"}:
        return _build_openai_provider(api_key, config)
    raise ValueError(f"Unsupported provider: {provider_name}")


def _as_image_list(images: ImagesInput) -> list[ImageInput]:
    if isinstance(images, (str, Path, bytes, Image.Image)):
        return [images]
    return list(images)


def _run_extraction(
    engine: BaseProvider,
    images: list[ImageInput],
    config: AnalysisConfig,
) -> ExtractionResult | None:
    try:
        text = engine.generate_json(
            EXTRACTION_PROMPT,
            images=images,
            temperature=config.extraction_temperature,
        )
    except ProductLensError:
        logger.warning("extraction call failed, continuing without extracted fields", exc_info=True)
        return None

    result = parse_extraction(text)
    if result is None:
        logger.warning("extraction reply did not match the product schema")
    return result


def _run_enrichment(engine: BaseProvider, query: str, config: AnalysisConfig) -> EnrichmentResult | None:
    try:
        text = engine.generate_json(
            build_enrichment_prompt(query),
            system_instruction=ENRICHMENT_SYSTEM_INSTRUCTION,
            temperature=config.enrichment_temperature,
        )
    except ProductLensError:
        logger.warning("enrichment call failed for %r, continuing without it", query, exc_info=True)
        return None

    result = parse_enrichment(text)
    if result is None:
        logger.warning("enrichment reply did not match the enrichment schema")
    return result


def analyze_with_metadata(
    images: ImagesInput,
    *,
    api_key: str | None = None,
    provider: str | None = None,
    config: AnalysisConfig | None = None,
) -> tuple[MergedResult, dict[str, str]]:
    """Analyze product photos and return the merged result with pipeline metadata.

    The extraction call and the enrichment call each degrade to "no data" on
    failure; only a missing or unreadable image aborts the analysis.

    Raises:
        MissingImageError: If no image is given. No provider call is made.
        ImageError: If an image cannot be loaded. No provider call is made.
        AuthenticationError: If the provider has no API key.
        ValueError: If the provider name is unknown.
    """
    config = config or AnalysisConfig.from_env()
    image_list = _as_image_list(images)
    if not image_list:
        raise MissingImageError("image required")
    if len(image_list) > config.max_images:
        logger.warning("received %d images, using the first %d", len(image_list), config.max_images)
        image_list = image_list[: config.max_images]

    # Unreadable images fail here, before any provider call.
    image_list = [load_image(image) for image in image_list]

    engine = _select_provider(provider, api_key, config)
    metadata = {
        "provider": engine.name,
        "model": engine.model,
        "image_count": str(len(image_list)),
    }

    extraction = _run_extraction(engine, image_list, config)
    metadata["extraction"] = "ok" if extraction is not None else "failed"
    extraction = extraction or ExtractionResult()

    enrichment = None
    query = extraction.search_query()
    if query:
        enrichment = _run_enrichment(engine, query, config)
        metadata["enrichment"] = "ok" if enrichment is not None else "failed"
    else:
        metadata["enrichment"] = "skipped"

    match = get_catalog(config.catalog_version).lookup(CatalogQuery.from_extraction(extraction))
    metadata["catalog_match"] = match.tier if match else "none"

    return merge_result(extraction, enrichment, match.entry if match else None), metadata


def analyze(
    images: ImagesInput,
    *,
    api_key: str | None = None,
    provider: str | None = None,
    config: AnalysisConfig | None = None,
) -> MergedResult:
    """Identify a product from one to five photos.

    Args:
        images: One image or a sequence of images - file paths, Path objects,
            raw bytes or PIL Images. Only the first five are used.
        api_key: Provider API key. Falls back to the provider's env var.
        provider: Provider name (`gemini` or `openai`). Defaults to
            `PRODUCT_LENS_PROVIDER` env var, then `gemini`.
        config: Settings; read from the environment when omitted.

    Returns:
        MergedResult. Fields will be None if no source provided them.
    """
    result, _ = analyze_with_metadata(images, api_key=api_key, provider=provider, config=config)
    return result
