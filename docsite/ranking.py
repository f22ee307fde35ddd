"""Salience ordering for classes and modules."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List

from .models import Entity

NAMESPACE_SEPARATOR = "::"


def top_level_namespace(full_name: str, separator: str = NAMESPACE_SEPARATOR) -> str:
    return full_name.split(separator, 1)[0]


def get_sorted_module_list(
    classes: Iterable[Entity], separator: str = NAMESPACE_SEPARATOR
) -> List[Entity]:
    """Return documented entities, busiest top-level namespace first.

    Namespaces are ranked by how many entities they hold (undocumented ones
    included), ties broken by namespace name; entities within a namespace are
    ordered by full name. This suits projects that put everything under a
    namespace without penalising those that don't.
    """
    entities = list(classes)
    counts = Counter(top_level_namespace(entity.full_name, separator) for entity in entities)

    def sort_key(entity: Entity) -> tuple[int, str, str]:
        namespace = top_level_namespace(entity.full_name, separator)
        return (-counts[namespace], namespace, entity.full_name)

    return [entity for entity in sorted(entities, key=sort_key) if entity.documented]


__all__ = ["NAMESPACE_SEPARATOR", "get_sorted_module_list", "top_level_namespace"]
