"""Exceptions raised while generating a site."""

from __future__ import annotations

from pathlib import Path


class GeneratorError(RuntimeError):
    """Base class for fatal generation failures."""


class TemplateEvaluationError(GeneratorError):
    """A template referenced something its render context does not provide."""

    def __init__(self, template_path: Path | str, message: str, snippet: str = "") -> None:
        self.template_path = Path(template_path)
        self.message = message
        self.snippet = snippet
        super().__init__(f"Error while evaluating {self.template_path}: {message} (at {snippet!r})")


__all__ = ["GeneratorError", "TemplateEvaluationError"]
