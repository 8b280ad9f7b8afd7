"""
Reading catalog files from disk.

The engine itself works on in-memory records; this module is a small
convenience for callers whose catalogs live in JSON or YAML files. A file
holds either a top-level list of verb records or an object with a ``verbs``
list.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import CatalogSourceError

logger = logging.getLogger("verb-engine")

SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


def read_catalog_file(path: Path | str) -> list[dict[str, Any]]:
    """
    Read raw verb records from a JSON or YAML file.

    Records are returned unvalidated; pass them to ``load_catalog``.

    Args:
        path: Catalog file

    Returns:
        List of record dicts

    Raises:
        CatalogSourceError: If the file is missing, has an unsupported
            extension, cannot be parsed, or has the wrong top-level shape
    """
    path = Path(path)
    if not path.exists():
        raise CatalogSourceError(f"Catalog file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise CatalogSourceError(
            f"Unsupported file format: {suffix}. "
            f"Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )

    try:
        raw_content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogSourceError(f"Failed to read file: {e}") from e

    try:
        if suffix == ".json":
            data = json.loads(raw_content)
        else:
            data = yaml.safe_load(raw_content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogSourceError(f"Failed to parse {suffix} file: {e}") from e

    if isinstance(data, dict):
        data = data.get("verbs")
    if not isinstance(data, list):
        raise CatalogSourceError(
            f"Catalog {path} must be a list of verbs or an object with a 'verbs' list"
        )

    records = [item for item in data if isinstance(item, dict)]
    if len(records) != len(data):
        raise CatalogSourceError(f"Catalog {path} contains non-object verb records")

    logger.info(f"Read {len(records)} verb records from {path}")
    return records
