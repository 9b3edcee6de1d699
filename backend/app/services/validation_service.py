"""
Dataset validation for the mall document.

Reports missing fields, duplicate ids, coordinates outside Qatar and likely
swapped latitude/longitude pairs. Works on the raw decoded JSON so it can
describe documents the repository would refuse to load.
"""
from typing import Any, Dict, List, Optional, Set

# Qatar bounding box
LATITUDE_RANGE = (24.5, 26.0)
LONGITUDE_RANGE = (50.5, 52.0)

REQUIRED_MALL_FIELDS = ("name", "latitude", "longitude")
REQUIRED_STORE_FIELDS = ("name", "type", "opening_hours")


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _coordinate_errors(record: Dict[str, Any], prefix: str = "") -> List[str]:
    """Range checks for optional latitude/longitude; ``prefix`` is e.g. "Mall "."""
    errors = []

    for field, (low, high) in (("latitude", LATITUDE_RANGE), ("longitude", LONGITUDE_RANGE)):
        value = record.get(field)
        if value is None:
            continue
        label = f"{prefix}{field}"
        number = _as_number(value)
        if number is None:
            errors.append(f"Invalid {label.lower()} ({value!r})")
        elif not low <= number <= high:
            errors.append(f"{label[0].upper()}{label[1:]} out of Qatar range ({value})")

    return errors


def validate_store(store: Dict[str, Any], index: int, seen_ids: Set[Any], mall_name: str) -> List[str]:
    """
    Validate one store record.

    Args:
        store: Raw store dict
        index: Position of the store inside its mall (0-based)
        seen_ids: Store ids seen so far across the dataset, updated in place
        mall_name: Name of the owning mall, for messages

    Returns:
        List of human readable issues
    """
    errors = []

    store_id = store.get("id")
    if store_id is None:
        errors.append("Missing id")
    elif store_id in seen_ids:
        errors.append("Duplicate id")
    else:
        seen_ids.add(store_id)

    for field in REQUIRED_STORE_FIELDS:
        if not store.get(field):
            errors.append(f"Missing {field}")

    # Stores normally inherit their mall's position, so coordinates are optional
    errors.extend(_coordinate_errors(store))

    latitude = _as_number(store.get("latitude"))
    longitude = _as_number(store.get("longitude"))
    if latitude and longitude and latitude < longitude / 10:
        errors.append("Possible swapped lat/lng")

    name = store.get("name") or "unknown"
    return [f"Store #{index + 1} in {mall_name} ({name}): {e}" for e in errors]


def validate_mall(mall: Dict[str, Any], index: int, seen_mall_ids: Set[Any], seen_store_ids: Set[Any]) -> List[str]:
    """
    Validate one mall record and its stores.

    Args:
        mall: Raw mall dict
        index: Position of the mall in the document (0-based)
        seen_mall_ids: Mall ids seen so far, updated in place
        seen_store_ids: Store ids seen so far, updated in place

    Returns:
        List of human readable issues
    """
    errors = []

    mall_id = mall.get("id")
    if mall_id is None:
        errors.append("Missing mall id")
    elif mall_id in seen_mall_ids:
        errors.append("Duplicate mall id")
    else:
        seen_mall_ids.add(mall_id)

    for field in REQUIRED_MALL_FIELDS:
        if not mall.get(field):
            errors.append(f"Missing mall {field}")

    errors.extend(_coordinate_errors(mall, prefix="Mall "))

    name = mall.get("name") or "unknown"
    issues = [f"Mall #{index + 1} ({name}): {e}" for e in errors]

    stores = mall.get("stores") or []
    if not isinstance(stores, list):
        issues.append(f"Mall #{index + 1} ({name}): stores must be a list")
        return issues

    for store_index, store in enumerate(stores):
        if not isinstance(store, dict):
            issues.append(f"Store #{store_index + 1} in {name} (unknown): not an object")
            continue
        issues.extend(validate_store(store, store_index, seen_store_ids, name))

    return issues


def validate_dataset(malls: Any) -> List[str]:
    """
    Validate a decoded mall document.

    Args:
        malls: Decoded JSON content, expected to be a list of mall dicts

    Returns:
        List of issues, empty when the dataset is valid

    Example:
        >>> validate_dataset([{"id": 1, "name": "A", "latitude": 25.3, "longitude": 51.5}])
        []
    """
    if not isinstance(malls, list):
        return ["Document root must be a list of malls"]

    seen_mall_ids: Set[Any] = set()
    seen_store_ids: Set[Any] = set()
    issues: List[str] = []

    for index, mall in enumerate(malls):
        if not isinstance(mall, dict):
            issues.append(f"Mall #{index + 1} (unknown): not an object")
            continue
        issues.extend(validate_mall(mall, index, seen_mall_ids, seen_store_ids))

    return issues


def count_stores(malls: List[Dict[str, Any]]) -> int:
    """Total number of stores across a decoded mall document."""
    return sum(len(mall.get("stores") or []) for mall in malls if isinstance(mall, dict))
