"""Schema catalog loading for puzzle payload contracts."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

import jsonschema

_REPO_ROOT = Path(__file__).resolve().parents[2]
_CONTRACT_ROOT = _REPO_ROOT / "PuzzleContracts"
_CATALOG_PATH = _CONTRACT_ROOT / "catalog.json"


@dataclass(frozen=True)
class SchemaDescriptor:
    payload_type: str
    version: str
    schema_id: str
    schema_path: str


_catalog_cache: Dict[str, SchemaDescriptor] | None = None
_schema_cache: Dict[Tuple[str, str], Dict[str, Any]] = {}
_compiled_cache: Dict[str, Any] = {}


def load_catalog() -> Dict[str, SchemaDescriptor]:
    """Load and cache ``PuzzleContracts/catalog.json``."""

    global _catalog_cache
    if _catalog_cache is not None:
        return _catalog_cache

    raw_catalog = json.loads(_CATALOG_PATH.read_text("utf-8"))
    _catalog_cache = {
        payload_type: SchemaDescriptor(
            payload_type=payload_type,
            version=entry["version"],
            schema_id=entry["schema_id"],
            schema_path=entry["schema_path"],
        )
        for payload_type, entry in raw_catalog.items()
    }
    return _catalog_cache


def get_descriptor(payload_type: str) -> SchemaDescriptor:
    catalog = load_catalog()
    if payload_type not in catalog:
        raise KeyError(f"Unknown payload type: {payload_type}")
    return catalog[payload_type]


def load_schema(descriptor: SchemaDescriptor) -> Dict[str, Any]:
    """Read the schema file named by ``descriptor`` from the local catalog."""

    if "://" in descriptor.schema_path:
        raise ValueError("Remote schema paths are not permitted")

    resolved = (_CONTRACT_ROOT / descriptor.schema_path).resolve()
    if not str(resolved).startswith(str(_CONTRACT_ROOT.resolve())):
        raise ValueError("Schema path escapes the contracts directory")

    cache_key = (descriptor.schema_id, descriptor.schema_path)
    if cache_key not in _schema_cache:
        schema = json.loads(resolved.read_text("utf-8"))
        if schema.get("$id", descriptor.schema_id) != descriptor.schema_id:
            raise ValueError(
                f"Schema id mismatch: catalog has {descriptor.schema_id!r}, schema has {schema['$id']!r}"
            )
        _schema_cache[cache_key] = schema
    return copy.deepcopy(_schema_cache[cache_key])


def compile_validator(descriptor: SchemaDescriptor) -> jsonschema.Draft202012Validator:
    cached = _compiled_cache.get(descriptor.schema_id)
    if cached is not None:
        return cached
    schema = load_schema(descriptor)
    jsonschema.Draft202012Validator.check_schema(schema)
    validator = jsonschema.Draft202012Validator(schema)
    _compiled_cache[descriptor.schema_id] = validator
    return validator


__all__ = [
    "SchemaDescriptor",
    "compile_validator",
    "get_descriptor",
    "load_catalog",
    "load_schema",
]
