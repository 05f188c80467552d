"""Static product catalog and tiered lookup."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from importlib import import_module
from importlib.resources import files
from typing import Literal

from product_lens.schema import DISPLAY_CURRENCY, ExtractionResult, Number

MatchTier = Literal["jan", "upc", "model", "name"]

_NON_DIGIT = re.compile(r"\D")


def normalize_code(value: str | None) -> str:
    """Keep only the digits of a barcode-style code."""
    return _NON_DIGIT.sub("", value or "")


@dataclass(frozen=True)
class CatalogEntry:
    title: str
    jan: str | None = None
    upc: str | None = None
    model: str | None = None
    official_release: str | None = None
    official_msrp: Number | None = None
    currency: str = DISPLAY_CURRENCY


@dataclass(frozen=True)
class CatalogQuery:
    jan: str | None = None
    upc: str | None = None
    name: str | None = None
    model: str | None = None

    @classmethod
    def from_extraction(cls, extraction: ExtractionResult) -> "CatalogQuery":
        return cls(
            jan=extraction.jan,
            upc=extraction.upc,
            name=extraction.name,
            model=extraction.model,
        )


@dataclass(frozen=True)
class CatalogMatch:
    entry: CatalogEntry
    tier: MatchTier


class CatalogRepository:
    """Loads catalog entries from packaged data and answers lookups.

    Entries are immutable and indexed once at construction. Lookup checks
    JAN, then UPC, then model, then a weak name match, and the first tier
    with a hit wins.
    """

    def __init__(self, version: str = "v1"):
        self.version = version
        self.entries: tuple[CatalogEntry, ...] = self._load_entries()
        self._jan_index = self._build_index(lambda entry: normalize_code(entry.jan))
        self._upc_index = self._build_index(lambda entry: normalize_code(entry.upc))
        self._model_index = self._build_index(lambda entry: (entry.model or "").strip().lower())

    def lookup(self, query: CatalogQuery) -> CatalogMatch | None:
        jan = normalize_code(query.jan)
        if jan and jan in self._jan_index:
            return CatalogMatch(self._jan_index[jan], "jan")

        upc = normalize_code(query.upc)
        if upc and upc in self._upc_index:
            return CatalogMatch(self._upc_index[upc], "upc")

        model = (query.model or "").strip().lower()
        if model and model in self._model_index:
            return CatalogMatch(self._model_index[model], "model")

        name = (query.name or "").lower()
        if name:
            for entry in self.entries:
                tokens = entry.title.lower().split()
                if tokens and tokens[0] in name:
                    return CatalogMatch(entry, "name")

        return None

    def _build_index(self, key_of) -> dict[str, CatalogEntry]:
        index: dict[str, CatalogEntry] = {}
        for entry in self.entries:
            key = key_of(entry)
            if key:
                index.setdefault(key, entry)
        return index

    def _load_entries(self) -> tuple[CatalogEntry, ...]:
        try:
            module = import_module(f"product_lens.catalog.data.{self.version}.items")
            data = module.ITEMS
        except ModuleNotFoundError:
            path = files("product_lens.catalog.data").joinpath(self.version, "items.json")
            data = json.loads(path.read_text(encoding="utf-8"))
        return tuple(CatalogEntry(**item) for item in data)


@lru_cache(maxsize=8)
def get_catalog(version: str = "v1") -> CatalogRepository:
    return CatalogRepository(version=version)


def lookup_catalog(query: CatalogQuery, *, version: str = "v1") -> CatalogEntry | None:
    """Return the catalog entry matching ``query``, or None."""
    match = get_catalog(version).lookup(query)
    return match.entry if match else None
