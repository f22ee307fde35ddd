"""Loading of extractor model dumps (YAML or JSON).

A dump is a mapping with two lists::

    classes:
      - full_name: Foo::Bar
        kind: class            # or "module"
        documented: true
        superclass: Object
        description: "<p>HTML from the extractor</p>"
        path: Foo/Bar.html     # optional, derived when missing
        constants:
          - {name: SVNId, value: "$Id: bar.rb 52 2009-01-07 02:08:11Z deveiant $"}
        methods:
          - {name: run, singleton: false, params: "(arg)", source: "def run(arg)..."}
    files:
      - full_name: lib/foo/bar.rb
        classes: [Foo::Bar]

JSON is a subset of YAML, so both formats go through ``yaml.safe_load``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from .config import GeneratorOptions
from .models import (
    Constant,
    Entity,
    Method,
    ProjectModel,
    SourceFile,
    class_output_path,
    file_output_path,
)


class ModelError(ValueError):
    """Raised when a model dump cannot be turned into entities and files."""


def load_model(path: Path, options: GeneratorOptions | None = None) -> ProjectModel:
    """Read a model dump from ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ModelError(f"Model file not found: {path}") from exc
    try:
        data = yaml.safe_load(text) if text.strip() else {}
    except yaml.YAMLError as exc:
        raise ModelError(f"Failed to parse {Path(path).name}: {exc}") from exc
    return build_model(data or {}, options)


def build_model(data: Any, options: GeneratorOptions | None = None) -> ProjectModel:
    """Build the read-only model from already-parsed data."""
    options = options or GeneratorOptions()
    if not isinstance(data, dict):
        raise ModelError("Model dump must contain a mapping at the root")

    classes: Dict[str, Entity] = {}
    for raw in _as_list(data.get("classes"), "classes"):
        entity = _build_entity(raw, options)
        if entity.full_name in classes:
            raise ModelError(f"Duplicate class or module {entity.full_name!r}")
        classes[entity.full_name] = entity

    files: List[SourceFile] = []
    for raw in _as_list(data.get("files"), "files"):
        files.append(_build_file(raw, classes, options))

    return ProjectModel(files=tuple(files), classes=tuple(classes.values()))


def _build_entity(raw: Any, options: GeneratorOptions) -> Entity:
    if not isinstance(raw, Mapping):
        raise ModelError("Each class entry must be a mapping")
    full_name = _require_str(raw, "full_name", "class")
    kind = str(raw.get("kind") or "class")
    if kind not in {"class", "module"}:
        raise ModelError(f"{full_name}: kind must be 'class' or 'module', got {kind!r}")

    constants = tuple(
        Constant(
            name=_require_str(item, "name", f"{full_name} constant"),
            value=str(item.get("value", "")),
            parent=full_name,
        )
        for item in _as_mappings(raw.get("constants"), f"{full_name} constants")
    )
    methods = tuple(
        Method(
            name=_require_str(item, "name", f"{full_name} method"),
            singleton=bool(item.get("singleton", False)),
            visibility=str(item.get("visibility") or "public"),
            params=str(item.get("params") or ""),
            description=str(item.get("description") or ""),
            source=str(item.get("source") or ""),
            parent=full_name,
        )
        for item in _as_mappings(raw.get("methods"), f"{full_name} methods")
    )
    return Entity(
        full_name=full_name,
        path=str(raw.get("path") or class_output_path(full_name, options.class_dir)),
        kind=kind,
        constants=constants,
        methods=methods,
        documented=bool(raw.get("documented", True)),
        superclass=str(raw["superclass"]) if raw.get("superclass") else None,
        description=str(raw.get("description") or ""),
    )


def _build_file(raw: Any, classes: Mapping[str, Entity], options: GeneratorOptions) -> SourceFile:
    if not isinstance(raw, Mapping):
        raise ModelError("Each file entry must be a mapping")
    full_name = _require_str(raw, "full_name", "file")
    entities = []
    for name in _as_list(raw.get("classes"), f"{full_name} classes"):
        entity = classes.get(str(name))
        if entity is None:
            raise ModelError(f"{full_name}: unknown class or module {name!r}")
        entities.append(entity)
    return SourceFile(
        full_name=full_name,
        path=str(raw.get("path") or file_output_path(full_name, options.file_dir)),
        entities=tuple(entities),
        description=str(raw.get("description") or ""),
    )


def _require_str(raw: Mapping[str, Any], key: str, what: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value:
        raise ModelError(f"{what} entry is missing {key!r}")
    return value


def _as_list(value: Any, what: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ModelError(f"{what} must be a list")
    return value


def _as_mappings(value: Any, what: str) -> List[Mapping[str, Any]]:
    items = _as_list(value, what)
    for item in items:
        if not isinstance(item, Mapping):
            raise ModelError(f"{what} entries must be mappings")
    return items


__all__ = ["ModelError", "build_model", "load_model"]
