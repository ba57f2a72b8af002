"""Typed extraction of values from the argument bag sent by MCP clients.

Every helper returns None when the key is missing or holds a value of the
wrong type. Deciding whether absence is an error is left to the caller.
"""

from typing import Any, Dict, List, Mapping, Optional


def _lookup(arguments: Optional[Mapping[str, Any]], name: str) -> Any:
    if not arguments:
        return None
    return arguments.get(name)


def get_string(arguments: Optional[Mapping[str, Any]], name: str) -> Optional[str]:
    value = _lookup(arguments, name)
    if isinstance(value, str):
        return value
    return None


def get_number(arguments: Optional[Mapping[str, Any]], name: str) -> Optional[float]:
    """
    Extract a JSON number.

    bool is a subclass of int in Python, so it is excluded explicitly.
    """
    value = _lookup(arguments, name)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return None


def get_boolean(arguments: Optional[Mapping[str, Any]], name: str) -> Optional[bool]:
    value = _lookup(arguments, name)
    if isinstance(value, bool):
        return value
    return None


def get_string_list(arguments: Optional[Mapping[str, Any]], name: str) -> Optional[List[str]]:
    """
    Extract an array of strings.

    Non-string items are skipped, so a list like ["day", 3] yields ["day"].
    """
    value = _lookup(arguments, name)
    if not isinstance(value, (list, tuple)):
        return None
    return [item for item in value if isinstance(item, str)]


def get_string_map(arguments: Optional[Mapping[str, Any]], name: str) -> Optional[Dict[str, str]]:
    value = _lookup(arguments, name)
    if not isinstance(value, Mapping):
        return None
    return {
        key: item
        for key, item in value.items()
        if isinstance(key, str) and isinstance(item, str)
    }
