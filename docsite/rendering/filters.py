"""Jinja filters and globals shared by every page template."""

from __future__ import annotations

from typing import Any, Callable, Dict

from ..config import GeneratorOptions
from ..models import Method


def cvs_url(url: str, path: str) -> str:
    """Build a web-VCS link: substitute ``%s`` if present, else append the path."""
    if "%s" in url:
        return url.replace("%s", path)
    return url + path


def format_source(text: str, *, tab_width: int = 8, line_numbers: bool = False, first_line: int = 1) -> str:
    """Expand tabs and optionally prefix each line with its number."""
    lines = text.expandtabs(tab_width).splitlines()
    if not line_numbers or not lines:
        return "\n".join(lines)
    width = len(str(first_line + len(lines) - 1))
    return "\n".join(
        f"{number:>{width}} {line}" for number, line in enumerate(lines, start=first_line)
    )


def method_label(method: Method, *, show_hash: bool = False) -> str:
    if method.singleton:
        return f"::{method.name}"
    return f"#{method.name}" if show_hash else method.name


def build_filters(options: GeneratorOptions) -> Dict[str, Callable[..., Any]]:
    """Return option-aware filters for the template environment."""

    def _format_source(text: str, first_line: int = 1) -> str:
        return format_source(
            text or "",
            tab_width=options.tab_width,
            line_numbers=options.line_numbers,
            first_line=first_line,
        )

    def _method_label(method: Method) -> str:
        return method_label(method, show_hash=options.show_hash)

    return {"format_source": _format_source, "method_label": _method_label}


__all__ = ["build_filters", "cvs_url", "format_source", "method_label"]
