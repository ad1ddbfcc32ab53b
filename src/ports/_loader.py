"""Helpers for loading puzzle modules dynamically."""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Dict

from orchestrator.router import ResolvedModule

_MODULE_CACHE: Dict[str, ModuleType] = {}


def load_module(resolved: ResolvedModule) -> ModuleType:
    """Import the module described by ``resolved`` and cache the instance."""

    cached = _MODULE_CACHE.get(resolved.impl_id)
    if cached is not None:
        return cached

    module = importlib.import_module(resolved.impl_id)
    _MODULE_CACHE[resolved.impl_id] = module
    return module


def get_handler(resolved: ResolvedModule, name: str):
    module = load_module(resolved)
    handler = getattr(module, name, None)
    if handler is None:
        raise AttributeError(
            f"Implementation '{resolved.module_id}' does not expose '{name}'"
        )
    return handler


__all__ = ["get_handler", "load_module"]
