"""Parsing of untrusted model output into the known response shapes.

A model reply is only ever treated as data: anything that is not a single
JSON object matching one of the shapes becomes ``None``, which callers treat
as "no data" rather than as an error.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from product_lens.schema import EnrichmentResult, ExtractionResult

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_CODE_FENCE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?```", re.DOTALL | re.IGNORECASE)
_OBJECT_SPAN = re.compile(r"\{.*\}", re.DOTALL)


def parse_json_object(text: str | None) -> dict[str, Any] | None:
    """Load the single JSON object contained in ``text``."""
    if not text:
        return None

    fenced = _CODE_FENCE.search(text)
    if fenced:
        text = fenced.group(1)
    text = text.strip()
    if not text:
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # Some replies wrap the object in prose.
        match = _OBJECT_SPAN.search(text)
        if not match:
            return None
        try:
            data = json.loads(match.group())
        except json.JSONDecodeError:
            return None

    return data if isinstance(data, dict) else None


def parse_model(text: str | None, model: type[ModelT]) -> ModelT | None:
    data = parse_json_object(text)
    if data is None:
        logger.debug("model reply is not a JSON object: %.200r", text)
        return None
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.debug("model reply does not match %s: %s", model.__name__, exc)
        return None


def parse_extraction(text: str | None) -> ExtractionResult | None:
    """Parse an extraction reply, or None when it carries no usable data."""
    return parse_model(text, ExtractionResult)


def parse_enrichment(text: str | None) -> EnrichmentResult | None:
    """Parse an enrichment reply, or None when it carries no usable data."""
    return parse_model(text, EnrichmentResult)
