"""
Values Paths — typed optional access into loosely-typed chart values.

Chart values come back from the deployment system as nested plain dicts.
Any missing level or unexpected type resolves to None rather than raising:
mid-rollout shapes are expected and the caller reports them as "waiting".
"""

from typing import Any, Optional, Sequence, Type, TypeVar, Union

T = TypeVar("T")

PSP_ENABLED_PATH = ("global", "cattle", "psp", "enabled")
SYSTEM_DEFAULT_REGISTRY_PATH = ("global", "cattle", "systemDefaultRegistry")


def split_path(path: Union[str, Sequence[str]]) -> Sequence[str]:
    if isinstance(path, str):
        return tuple(p for p in path.split(".") if p)
    return tuple(path)


def get_path(
    values: Any,
    path: Union[str, Sequence[str]],
    expected_type: Optional[Type[T]] = None,
) -> Optional[T]:
    """
    Walk `path` ("a.b.c" or a sequence of keys) through nested mappings.

    Returns None when any intermediate level is absent or not a mapping, or
    when the leaf does not have `expected_type`. bool is checked exactly so
    that an int 1 is never mistaken for True.
    """
    node = values
    for key in split_path(path):
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    if expected_type is None:
        return node
    if expected_type is bool:
        return node if type(node) is bool else None
    return node if isinstance(node, expected_type) else None


def set_path(values: dict, path: Union[str, Sequence[str]], value: Any) -> dict:
    """Set `value` at `path`, creating intermediate dicts. Returns `values`."""
    keys = split_path(path)
    node = values
    for key in keys[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[keys[-1]] = value
    return values
