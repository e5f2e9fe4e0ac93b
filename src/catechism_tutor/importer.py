"""Import a catechism catalog from JSON or YAML."""
import json
import logging
from pathlib import Path

import yaml

from catechism_tutor.catalog import replace_catalog

log = logging.getLogger(__name__)


def read_catalog_file(file_path: str) -> list:
    """Return the ``Q/A/S`` entries of a catalog file.

    The file holds either a list of entries or a mapping with an ``items`` list.
    """
    path = Path(file_path)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    if suffix == ".json":
        data = json.loads(text)
    elif suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        raise ValueError(f"Unsupported catalog format: {suffix or path.name}")

    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list) or not data:
        raise ValueError(f"{path.name} contains no catechism items")
    for number, entry in enumerate(data, 1):
        if not isinstance(entry, dict) or "Q" not in entry or "A" not in entry:
            raise ValueError(f"Item {number} in {path.name} needs 'Q' and 'A' fields")
        groups = entry.get("S") or []
        if not isinstance(groups, list) or not all(
            isinstance(group, list) and all(isinstance(ref, dict) and "T" in ref and "C" in ref for ref in group)
            for group in groups
        ):
            raise ValueError(f"Item {number} in {path.name} has malformed scripture references")
    return data


def import_catalog(db_path: str, file_path: str, language: str) -> dict:
    """Replace the ``language`` catalog with the contents of ``file_path``."""
    entries = read_catalog_file(file_path)
    count = replace_catalog(db_path, language, entries)
    log.info("Imported %d items from %s as %s", count, file_path, language)
    return {"filename": Path(file_path).name, "language": language, "count": count}
