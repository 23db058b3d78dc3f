"""
Validation and hydration of subsidy rule catalogs
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from ..models.subsidy import SubsidyProgram

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "subsidies.json"


class CatalogValidationError(ValueError):
    """Raised when a catalog entry is structurally invalid"""


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def validate_catalog_entry(entry: Any) -> Tuple[bool, str]:
    """
    Validate one raw catalog entry

    Unknown operators are accepted; the matcher fails them closed.

    Returns:
        (is_valid, message)
    """
    if not isinstance(entry, dict):
        return False, "catalog entry must be a dictionary"

    for key in ["id", "name", "eligibility_rules"]:
        if key not in entry:
            return False, f"Missing required key: {key}"

    if not isinstance(entry["id"], str) or not entry["id"].strip():
        return False, "id must be a non-empty string"

    rules = entry["eligibility_rules"]
    if not isinstance(rules, list):
        return False, "eligibility_rules must be a list"

    for i, rule in enumerate(rules):
        if not isinstance(rule, dict):
            return False, f"eligibility_rules[{i}] must be a dictionary"

        field_name = rule.get("field_name")
        if not isinstance(field_name, str) or not field_name.strip():
            return False, f"eligibility_rules[{i}] missing 'field_name'"
        if not isinstance(rule.get("operator"), str):
            return False, f"eligibility_rules[{i}] missing 'operator'"
        if "value" not in rule:
            return False, f"eligibility_rules[{i}] missing 'value'"

        weight = rule.get("weight")
        if weight is not None and not _is_positive_number(weight):
            return False, f"eligibility_rules[{i}] weight must be a positive number"

        if rule["operator"] == "between":
            value = rule["value"]
            if not isinstance(value, list) or len(value) != 2:
                return False, f"'between' operator requires a [min, max] value in eligibility_rules[{i}]"

    return True, "Valid catalog entry"


def parse_catalog_entry(entry: Dict[str, Any]) -> SubsidyProgram:
    """Validate and hydrate one entry, raising CatalogValidationError"""
    is_valid, message = validate_catalog_entry(entry)
    if not is_valid:
        entry_id = entry.get("id") if isinstance(entry, dict) else None
        raise CatalogValidationError(f"Invalid catalog entry {entry_id!r}: {message}")

    document = {k: v for k, v in entry.items() if k != "_id"}
    try:
        return SubsidyProgram(**document)
    except ValidationError as e:
        raise CatalogValidationError(f"Invalid catalog entry {entry.get('id')!r}: {e}") from e


def load_catalog(entries: Iterable[Dict[str, Any]]) -> List[SubsidyProgram]:
    """Hydrate a whole catalog; the first invalid entry aborts the load"""
    catalog = [parse_catalog_entry(entry) for entry in entries]

    ids = [program.id for program in catalog]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise CatalogValidationError(f"Duplicate subsidy ids: {', '.join(duplicates)}")

    return catalog


def load_catalog_file(path: Optional[Union[str, Path]] = None) -> List[SubsidyProgram]:
    """
    Load a catalog from a JSON array on disk

    Args:
        path: JSON file to read (packaged default catalog if None)
    """
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    with open(catalog_path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise CatalogValidationError(f"{catalog_path} must contain a JSON array of subsidies")

    catalog = load_catalog(data)
    logger.info(f"Loaded {len(catalog)} subsidies from {catalog_path}")
    return catalog
