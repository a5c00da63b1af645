"""Parameter normalization for list-valued request parameters."""

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence


def normalize(
    params: Mapping[str, Any],
    array_key_prefixes: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Flatten list-valued parameters into 1-based indexed keys.

    ``{"Ids": ["a", "b"]}`` with ``{"Ids": "Id."}`` becomes
    ``{"Id.1": "a", "Id.2": "b"}``. Mapped keys holding a scalar are left
    as they are.

    Args:
        params: Caller parameters (never modified)
        array_key_prefixes: Logical parameter name to key prefix

    Returns:
        New parameter dict
    """
    result = dict(params)
    if not array_key_prefixes:
        return result

    expanded = {}
    for key, prefix in array_key_prefixes.items():
        values = result.get(key)
        if isinstance(values, (list, tuple)):
            for index, value in enumerate(values, start=1):
                expanded[f"{prefix}{index}"] = value
            del result[key]

    result.update(expanded)
    return result


def split_batches(items: Sequence[Any], size: int) -> List[List[Any]]:
    """Split a sequence into consecutive chunks of at most ``size`` items."""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    return list(_iter_batches(items, size))


def _iter_batches(items: Sequence[Any], size: int) -> Iterator[List[Any]]:
    values = list(items)
    for start in range(0, len(values), size):
        yield values[start:start + size]
