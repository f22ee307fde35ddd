"""Template evaluation and page output."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateSyntaxError, UndefinedError, meta
from markupsafe import Markup

from ..config import GeneratorOptions
from ..errors import TemplateEvaluationError
from ..logging import get_logger
from ..models import Entity
from .contexts import RenderContext
from .crossref import CrossReferencer
from .filters import build_filters, cvs_url

SNIPPET_LENGTH = 50


class TemplateRenderer:
    """Evaluates page templates from one template directory and writes pages."""

    def __init__(self, template_dir: Path, options: GeneratorOptions) -> None:
        self.template_dir = Path(template_dir)
        self.options = options
        self.logger = get_logger("renderer")
        self._cross_referencer: Optional[CrossReferencer] = None
        self.environment = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.environment.filters.update(build_filters(options))
        self.environment.filters["crossref"] = self._crossref
        self.environment.globals["cvs_url"] = cvs_url

    def use_cross_references(self, classes: Iterable[Entity]) -> None:
        """Resolve ``crossref`` links against ``classes`` for subsequent renders."""
        self._cross_referencer = CrossReferencer(
            classes,
            hyperlink_all=self.options.hyperlink_all,
            show_hash=self.options.show_hash,
        )

    def has_template(self, name: str) -> bool:
        return (self.template_dir / name).is_file()

    def check_template(self, name: str, allowed_names: Iterable[str]) -> None:
        """Fail before rendering if ``name`` references bindings it won't receive."""
        template_path = self.template_dir / name
        source, filename, _ = self.environment.loader.get_source(self.environment, name)  # type: ignore[union-attr]
        try:
            tree = self.environment.parse(source, name, filename)
        except TemplateSyntaxError as exc:
            raise TemplateEvaluationError(template_path, exc.message or str(exc)) from exc
        undeclared = meta.find_undeclared_variables(tree) - set(allowed_names) - set(self.environment.globals)
        if undeclared:
            missing = ", ".join(sorted(undeclared))
            raise TemplateEvaluationError(template_path, f"undefined name(s): {missing}")

    def render(self, name: str, context: RenderContext, outfile: Path) -> int:
        """Render template ``name`` with ``context`` into ``outfile``.

        Returns the number of bytes the page takes in ``options.charset``. In
        dry-run mode the page is generated but nothing touches the filesystem.
        """
        template_path = self.template_dir / name
        template = self._load(name, template_path)

        chunks: List[str] = []
        try:
            for chunk in template.generate(**context.as_bindings()):
                chunks.append(chunk)
        except UndefinedError as exc:
            partial = "".join(chunks)
            raise TemplateEvaluationError(
                template_path, exc.message or str(exc), partial[-SNIPPET_LENGTH:]
            ) from exc
        encoded = "".join(chunks).encode(self.options.charset)

        if self.options.dry_run:
            self.logger.debug("  would have written %d bytes to %s", len(encoded), outfile)
            return len(encoded)

        outfile.parent.mkdir(parents=True, exist_ok=True)
        self.logger.debug("  writing %s", outfile)
        with outfile.open("wb") as handle:
            handle.write(encoded)
        return len(encoded)

    def _load(self, name: str, template_path: Path) -> Template:
        try:
            return self.environment.get_template(name)
        except TemplateSyntaxError as exc:
            raise TemplateEvaluationError(template_path, exc.message or str(exc)) from exc

    def _crossref(self, html: str, rel_prefix: str = ".", context: Optional[Entity] = None) -> Markup:
        if self._cross_referencer is None:
            return Markup(html or "")
        return self._cross_referencer.link(html, rel_prefix, context)


__all__ = ["SNIPPET_LENGTH", "TemplateRenderer"]
