"""Validate packaged catalog data.

Checks:
1. Python sources and JSON mirrors are identical for catalog items.
2. Every entry has a title and JAN/UPC codes contain digits only.
3. No two entries share a JAN, UPC or model.
4. Official prices are non-negative numbers and release dates use
   YYYY, YYYY-MM or YYYY-MM-DD.
"""

from __future__ import annotations

import json
import re
import runpy
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
DATA_ROOT = ROOT / "src" / "product_lens" / "catalog" / "data"
RELEASE_PATTERN = re.compile(r"^\d{4}(-\d{2}){0,2}$")


def fail(message: str) -> None:
    print(f"[catalog-check] ERROR: {message}")
    raise SystemExit(1)


def load_python_constant(path: Path, key: str) -> list[dict]:
    namespace = runpy.run_path(str(path))
    if key not in namespace or not isinstance(namespace[key], list):
        fail(f"Missing or invalid constant '{key}' in {path}")
    return namespace[key]


def load_json(path: Path) -> list[dict]:
    if not path.exists():
        fail(f"Missing JSON file: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        fail(f"JSON file must contain a list: {path}")
    return data


def validate_entry(item: dict, label: str) -> None:
    title = item.get("title")
    if not isinstance(title, str) or not title.split():
        fail(f"{label}: entry without title: {item}")

    for field in ("jan", "upc"):
        code = item.get(field)
        if code is not None and (not isinstance(code, str) or not code.isdigit()):
            fail(f"{label}: {field} must contain digits only: {title}")

    price = item.get("official_msrp")
    if price is not None and (isinstance(price, bool) or not isinstance(price, (int, float)) or price < 0):
        fail(f"{label}: invalid official_msrp for {title}: {price!r}")

    release = item.get("official_release")
    if release is not None and not RELEASE_PATTERN.match(str(release)):
        fail(f"{label}: invalid official_release for {title}: {release!r}")


def validate_unique_keys(items: list[dict], label: str) -> None:
    for field in ("jan", "upc", "model"):
        seen: dict[str, str] = {}
        for item in items:
            value = item.get(field)
            if not value:
                continue
            key = str(value).strip().lower()
            if key in seen:
                fail(f"{label}: duplicate {field} {value!r}: {seen[key]} vs {item['title']}")
            seen[key] = item["title"]


def iter_catalog_versions() -> list[Path]:
    versions: list[Path] = []
    for path in sorted(DATA_ROOT.iterdir()):
        if not path.is_dir():
            continue
        if (path / "items.py").exists() and (path / "items.json").exists():
            versions.append(path)
    if not versions:
        fail(f"No catalog versions found under {DATA_ROOT}")
    return versions


def main() -> int:
    for version_dir in iter_catalog_versions():
        label = f"{version_dir.name}/items"
        items_py = load_python_constant(version_dir / "items.py", "ITEMS")
        items_json = load_json(version_dir / "items.json")

        if items_py != items_json:
            fail(f"{label}.py and {label}.json are out of sync. Run mirror update before commit.")
        for item in items_py:
            validate_entry(item, label)
        validate_unique_keys(items_py, label)

    print("[catalog-check] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
