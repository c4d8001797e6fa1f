"""Utilities for handling YAML parsing quirks."""

from typing import Any, Dict, TypeVar

V = TypeVar("V")


def normalize_yaml_dict_keys(data: Dict[Any, V]) -> Dict[str, V]:
    """Normalize dictionary keys from YAML parsing to consistent strings.

    YAML 1.1 boolean keys (``yes``, ``no``, ``on``, ``off``...) parse to Python
    ``True``/``False`` and numeric keys parse to numbers. All keys come back as
    strings, booleans as ``"True"``/``"False"``.

    Examples:
        >>> normalize_yaml_dict_keys({True: 1, 3: 2, "edges": 3})
        {'True': 1, '3': 2, 'edges': 3}
    """
    return {str(key): value for key, value in data.items()}
