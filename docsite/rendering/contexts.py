"""Explicit render contexts, one per page type.

Each context lists exactly the names its template may reference. The renderer
checks templates against :meth:`binding_names` before evaluating them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

from ..config import GeneratorOptions
from ..models import Entity, Method, RevisionInfo, SourceFile


class _RenderContext:
    def as_bindings(self) -> Dict[str, Any]:
        # Shallow on purpose: templates see the shared read-only tuples.
        return {item.name: getattr(self, item.name) for item in fields(self)}  # type: ignore[arg-type]

    @classmethod
    def binding_names(cls) -> FrozenSet[str]:
        return frozenset(item.name for item in fields(cls))  # type: ignore[arg-type]


@dataclass(frozen=True)
class IndexContext(_RenderContext):
    """Bindings for the site index page."""

    options: GeneratorOptions
    files: Tuple[SourceFile, ...]
    classes: Tuple[Entity, ...]
    modsort: Tuple[Entity, ...]
    methods: Tuple[Tuple[Entity, Method], ...]
    main_page: Optional[Union[Entity, SourceFile]]
    rel_prefix: str
    stylesheet_href: str


@dataclass(frozen=True)
class ClassPageContext(_RenderContext):
    """Bindings for a class or module page."""

    options: GeneratorOptions
    files: Tuple[SourceFile, ...]
    classes: Tuple[Entity, ...]
    modsort: Tuple[Entity, ...]
    klass: Entity
    svninfo: Optional[RevisionInfo]
    outfile: Path
    rel_prefix: str
    stylesheet_href: str


@dataclass(frozen=True)
class FilePageContext(_RenderContext):
    """Bindings for a source file page."""

    options: GeneratorOptions
    files: Tuple[SourceFile, ...]
    classes: Tuple[Entity, ...]
    modsort: Tuple[Entity, ...]
    file: SourceFile
    cvs_url: Optional[str]
    outfile: Path
    rel_prefix: str
    stylesheet_href: str


RenderContext = Union[IndexContext, ClassPageContext, FilePageContext]

__all__ = ["ClassPageContext", "FilePageContext", "IndexContext", "RenderContext"]
