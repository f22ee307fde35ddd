"""Read-only view of the host extractor's model consumed by the generator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Constant:
    """A constant declared on a class or module."""

    name: str
    value: str
    parent: Optional[str] = None


@dataclass(frozen=True)
class Method:
    """A method documented on a class or module."""

    name: str
    singleton: bool = False
    visibility: str = "public"
    params: str = ""
    description: str = ""
    source: str = ""
    parent: Optional[str] = None

    @property
    def full_name(self) -> str:
        separator = "::" if self.singleton else "#"
        return f"{self.parent or ''}{separator}{self.name}"

    @property
    def aref(self) -> str:
        """Anchor used for the method on its owner's page."""
        prefix = "method-c-" if self.singleton else "method-i-"
        return prefix + "".join(ch if ch.isalnum() or ch == "_" else "-" for ch in self.name)


@dataclass(frozen=True)
class Entity:
    """A class or module as supplied by the extractor."""

    full_name: str
    path: str
    kind: str = "class"
    constants: Tuple[Constant, ...] = ()
    methods: Tuple[Method, ...] = ()
    documented: bool = True
    superclass: Optional[str] = None
    description: str = ""

    @property
    def name(self) -> str:
        return self.full_name.rsplit("::", 1)[-1]

    @property
    def is_module(self) -> bool:
        return self.kind == "module"

    @property
    def method_list(self) -> Tuple[Method, ...]:
        return tuple(sorted(self.methods, key=lambda method: (method.name, method.singleton)))


@dataclass(frozen=True)
class SourceFile:
    """A parsed source file and the entities it declares."""

    full_name: str
    path: str
    entities: Tuple[Entity, ...] = ()
    description: str = ""

    @property
    def base_name(self) -> str:
        return self.full_name.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class RevisionInfo:
    """Last-change details parsed from an embedded revision tag."""

    filename: str
    rev: int
    commitdate: datetime
    commitdelta: str
    committer: str


@dataclass(frozen=True)
class ProjectModel:
    """Files and entities handed to the generator for a single run."""

    files: Tuple[SourceFile, ...] = ()
    classes: Tuple[Entity, ...] = ()


def class_output_path(full_name: str, class_dir: str | None = None) -> str:
    """Return the page path for a class or module relative to the output root."""
    relative = full_name.replace("::", "/") + ".html"
    return f"{class_dir.rstrip('/')}/{relative}" if class_dir else relative


def file_output_path(full_name: str, file_dir: str | None = None) -> str:
    """Return the page path for a source file relative to the output root."""
    relative = full_name.replace(".", "_") + ".html"
    return f"{file_dir.rstrip('/')}/{relative}" if file_dir else relative


__all__ = [
    "Constant",
    "Entity",
    "Method",
    "ProjectModel",
    "RevisionInfo",
    "SourceFile",
    "class_output_path",
    "file_output_path",
]
