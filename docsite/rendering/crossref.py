"""Hyperlinking of class and method references inside description HTML."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Tuple

from markupsafe import Markup, escape

from ..models import Entity, Method

_CLASS = r"[A-Z]\w*(?:::[A-Z]\w*)*"
_METHOD = r"[a-z_]\w*[!?=]?"

_EXPLICIT = (
    rf"(?P<cls>{_CLASS})(?:(?P<sep>\#|::)(?P<meth>{_METHOD}))?"
    rf"|(?P<marker>\#|::)(?P<bare>{_METHOD})"
)
_IMPLICIT = rf"|(?P<word>{_METHOD})"

_TAG = re.compile(r"(<[^>]+>)")
_SKIP_TAGS = {"a", "pre", "code"}
_TAG_NAME = re.compile(r"^</?\s*([a-zA-Z0-9]+)")


class CrossReferencer:
    """Turns ``Class``, ``Class#method``, ``#method`` and ``::method`` into links.

    With ``hyperlink_all`` bare words matching a known method name are linked
    too. Text inside tags or inside ``<a>``, ``<pre>`` and ``<code>`` elements is
    left alone.
    """

    def __init__(
        self,
        classes: Iterable[Entity],
        *,
        hyperlink_all: bool = False,
        show_hash: bool = False,
    ) -> None:
        self.hyperlink_all = hyperlink_all
        self.show_hash = show_hash
        self._classes: Dict[str, Entity] = {}
        self._methods: Dict[str, List[Tuple[Entity, Method]]] = {}
        for entity in classes:
            if not entity.documented:
                continue
            self._classes.setdefault(entity.full_name, entity)
            for method in entity.method_list:
                self._methods.setdefault(method.name, []).append((entity, method))
        # Bare names resolve to the first owner by full name.
        for owners in self._methods.values():
            owners.sort(key=lambda pair: pair[0].full_name)
        pattern = _EXPLICIT + (_IMPLICIT if hyperlink_all else "")
        self._pattern = re.compile(rf"(?<![\w#:&])(?:{pattern})(?![\w:])")

    def link(self, html: str, rel_prefix: str = ".", context: Optional[Entity] = None) -> Markup:
        """Return ``html`` with resolvable references wrapped in anchors."""
        pieces: List[str] = []
        skip_depth = 0
        for token in _TAG.split(html or ""):
            if not token:
                continue
            if token.startswith("<"):
                skip_depth = _track_skip(token, skip_depth)
                pieces.append(token)
            elif skip_depth:
                pieces.append(token)
            else:
                pieces.append(
                    self._pattern.sub(lambda match: self._replace(match, rel_prefix, context), token)
                )
        return Markup("".join(pieces))

    def _replace(self, match: "re.Match[str]", rel_prefix: str, context: Optional[Entity]) -> str:
        text = match.group(0)
        if match.group("cls"):
            entity = self._classes.get(match.group("cls"))
            if entity is None:
                return text
            if not match.group("meth"):
                return _anchor(f"{rel_prefix}/{entity.path}", text)
            method = _find_method(entity, match.group("meth"), singleton=match.group("sep") == "::")
            if method is None:
                return text
            return _anchor(f"{rel_prefix}/{entity.path}#{method.aref}", text)

        name = match.group("bare") or match.group("word")
        marker = match.group("marker") or ""
        kind = {"::": True, "#": False}.get(marker)
        resolved = self._resolve_method(name, context, singleton=kind)
        if resolved is None:
            return text
        entity, method = resolved
        label = text
        if marker == "#" and not self.show_hash:
            label = name
        return _anchor(f"{rel_prefix}/{entity.path}#{method.aref}", label)

    def _resolve_method(
        self, name: str, context: Optional[Entity], *, singleton: Optional[bool]
    ) -> Optional[Tuple[Entity, Method]]:
        if context is not None:
            method = _find_method(context, name, singleton=singleton)
            if method is not None:
                return context, method
        for entity, method in self._methods.get(name, []):
            if singleton is None or method.singleton == singleton:
                return entity, method
        return None


def _find_method(entity: Entity, name: str, *, singleton: Optional[bool]) -> Optional[Method]:
    candidates = [method for method in entity.method_list if method.name == name]
    if singleton is True:
        # "Class::name" may also name an instance method.
        candidates.sort(key=lambda method: not method.singleton)
    elif singleton is False:
        candidates = [method for method in candidates if not method.singleton]
    return candidates[0] if candidates else None


def _anchor(href: str, label: str) -> str:
    return f'<a href="{escape(href)}">{label}</a>'


def _track_skip(tag: str, depth: int) -> int:
    match = _TAG_NAME.match(tag)
    if not match or match.group(1).lower() not in _SKIP_TAGS or tag.endswith("/>"):
        return depth
    if tag.startswith("</"):
        return max(0, depth - 1)
    return depth + 1


__all__ = ["CrossReferencer"]
