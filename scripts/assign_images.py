"""Match catalog entries from a JSON export against a photos folder."""

from __future__ import annotations

import argparse
import asyncio
import json
from dataclasses import asdict
from pathlib import Path

from catalog_images.config.settings import get_settings
from catalog_images.monitoring.logging import configure_logging
from catalog_images.providers import DirectoryCandidateProvider, load_candidates
from catalog_images.resolver import ImageResolver
from catalog_images.services import CatalogEntry, CatalogImageMapper


def _load_entries(path: Path) -> list[CatalogEntry]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    return [
        CatalogEntry(
            reference=str(item.get("reference", "")),
            name=str(item.get("name", "")),
            brand=item.get("brand") or item.get("brand_name"),
        )
        for item in payload
        if isinstance(item, dict)
    ]


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("catalog", type=Path, help="JSON list of {reference, name, brand}")
    parser.add_argument("--photos", default=settings.photos_root, help="folder holding the images")
    parser.add_argument("--base-path", default=f"{settings.image_folder}/Fragrances")
    parser.add_argument("--overrides", type=Path, help="JSON object of reference -> image path")
    args = parser.parse_args()

    configure_logging()
    candidates = asyncio.run(load_candidates(DirectoryCandidateProvider(args.photos)))
    resolver = ImageResolver(
        candidates,
        placeholder=settings.placeholder_path,
        base_path=args.base_path,
    )
    overrides = json.loads(args.overrides.read_text(encoding="utf-8")) if args.overrides else {}
    mapper = CatalogImageMapper(resolver, overrides)

    assignments = mapper.assign_all(_load_entries(args.catalog))
    print(json.dumps([asdict(item) for item in assignments], ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
