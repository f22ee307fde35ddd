"""Named output generators selectable from the command line."""

from __future__ import annotations

from typing import Dict, List, Type

from .generator import SiteGenerator

_GENERATORS: Dict[str, Type[SiteGenerator]] = {}


def add_generator(name: str, generator_cls: Type[SiteGenerator]) -> None:
    """Register ``generator_cls`` under ``name``, replacing any previous entry."""
    _GENERATORS[name.lower()] = generator_cls


def get_generator(name: str) -> Type[SiteGenerator]:
    try:
        return _GENERATORS[name.lower()]
    except KeyError:
        known = ", ".join(available_generators()) or "none"
        raise KeyError(f"unknown generator {name!r} (available: {known})") from None


def available_generators() -> List[str]:
    return sorted(_GENERATORS)


add_generator("html", SiteGenerator)

__all__ = ["add_generator", "available_generators", "get_generator"]
