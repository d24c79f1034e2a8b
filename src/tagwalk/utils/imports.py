from __future__ import annotations

"""
Dynamic loading of plug-in collaborators.

Parse-stage and tag-store implementations can be swapped at runtime by
naming them as "module.path:AttrName" (CLI `--parser` or the
TAGWALK_PARSER environment variable).

Public API:
    - load_object_from_ref(ref): object
    - build_from_ref(ref, **kwargs): instance
"""

import importlib
from typing import Any


def load_object_from_ref(ref: str) -> Any:
    """Resolve 'module.path:AttrName' into the referenced attribute.

    Raises:
        ImportError: If the reference is malformed or cannot be resolved.
    """
    module_name, sep, obj_name = (ref or '').strip().partition(':')
    if not module_name or not sep or not obj_name:
        raise ImportError(f"Invalid reference '{ref}'. Expected 'module.path:AttrName'.")
    try:
        module = importlib.import_module(module_name)
    except Exception as exc:
        raise ImportError(f"Failed to import module '{module_name}': {exc}") from exc
    target: Any = module
    for part in obj_name.split('.'):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ImportError(f"Module '{module_name}' has no attribute '{obj_name}'") from exc
    return target


def build_from_ref(ref: str, **kwargs: Any) -> Any:
    """Load a class or factory by reference and call it with *kwargs*."""
    factory = load_object_from_ref(ref)
    if not callable(factory):
        raise ImportError(f"Reference '{ref}' is not callable")
    return factory(**kwargs)
