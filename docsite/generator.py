"""HTML site generation from an extracted documentation model."""

from __future__ import annotations

import logging
import os
import shutil
import traceback
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .config import GeneratorOptions, check_charset, resolve_template_dir
from .logging import get_logger
from .models import Entity, Method, SourceFile
from .ranking import get_sorted_module_list
from .rendering import ClassPageContext, FilePageContext, IndexContext, TemplateRenderer
from .rendering.filters import cvs_url
from .revision import get_revision_info

INDEX_TEMPLATE = "index.html.j2"
CLASS_TEMPLATE = "classpage.html.j2"
FILE_TEMPLATE = "filepage.html.j2"
STYLESHEET = "style.css"
ASSET_DIRS = ("scripts", "images")


class GeneratorState(Enum):
    """Progress of a generation run; each step requires the previous one."""

    INIT = "init"
    OUTPUT_DIR_READY = "output_dir_ready"
    ASSETS_COPIED = "assets_copied"
    INDEX_RENDERED = "index_rendered"
    CLASS_PAGES_RENDERED = "class_pages_rendered"
    FILE_PAGES_RENDERED = "file_pages_rendered"
    DONE = "done"


@dataclass
class GenerationReport:
    """What a run produced (or, in dry-run mode, would have produced)."""

    output_dir: Path
    dry_run: bool
    pages: List[Tuple[Path, int]] = field(default_factory=list)
    assets: List[Path] = field(default_factory=list)

    @property
    def total_length(self) -> int:
        return sum(length for _, length in self.pages)


class SiteGenerator:
    """Writes an index page, one page per class/module and one per source file."""

    def __init__(
        self,
        options: GeneratorOptions,
        *,
        basedir: Path | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.options = options
        check_charset(options.charset)
        self.template_dir = resolve_template_dir(options)
        self.basedir = (basedir or Path.cwd()).expanduser().resolve()
        self.renderer = renderer or TemplateRenderer(self.template_dir, options)
        self.logger = get_logger("generator")
        self.state = GeneratorState.INIT
        self.outputdir: Optional[Path] = None

        self.files: Tuple[SourceFile, ...] = ()
        self.classes: Tuple[Entity, ...] = ()
        self.methods: Tuple[Tuple[Entity, Method], ...] = ()
        self.modsort: Tuple[Entity, ...] = ()

    @classmethod
    def for_options(cls, options: GeneratorOptions) -> "SiteGenerator":
        return cls(options)

    def generate(self, files: Iterable[SourceFile], classes: Iterable[Entity]) -> GenerationReport:
        """Run every generation step; any failure aborts the run and propagates."""
        self.state = GeneratorState.INIT
        self.outputdir = (self.basedir / self.options.op_dir).resolve()
        report = GenerationReport(output_dir=self.outputdir, dry_run=self.options.dry_run)

        self.files = tuple(sorted(files, key=lambda item: item.full_name))
        self.classes = tuple(sorted(classes, key=lambda item: item.full_name))
        self.modsort = tuple(get_sorted_module_list(self.classes))
        self.methods = tuple(
            sorted(
                ((klass, method) for klass in self.modsort for method in klass.methods),
                key=lambda pair: (pair[1].name, pair[0].full_name),
            )
        )
        self.renderer.use_cross_references(self.classes)

        try:
            self.gen_sub_directories()
            self._advance(GeneratorState.OUTPUT_DIR_READY)
            report.assets.extend(self.write_style_sheet())
            self._advance(GeneratorState.ASSETS_COPIED)
            report.pages.extend(self.generate_index())
            self._advance(GeneratorState.INDEX_RENDERED)
            report.pages.extend(self.generate_class_files())
            self._advance(GeneratorState.CLASS_PAGES_RENDERED)
            report.pages.extend(self.generate_file_files())
            self._advance(GeneratorState.FILE_PAGES_RENDERED)
        except Exception as exc:
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(
                    "%s: %s\n  %s",
                    exc.__class__.__name__,
                    exc,
                    "\n  ".join(traceback.format_tb(exc.__traceback__)),
                )
            raise

        self._advance(GeneratorState.DONE)
        self.logger.info(
            "Generated %d pages in %s%s",
            len(report.pages),
            self.outputdir,
            " (dry run)" if self.options.dry_run else "",
        )
        return report

    def gen_sub_directories(self) -> None:
        """Create the output directory unless this is a dry run."""
        outputdir = self._require_outputdir()
        if self.options.dry_run:
            self.logger.debug("Would create %s", outputdir)
            return
        outputdir.mkdir(parents=True, exist_ok=True)

    def write_style_sheet(self) -> List[Path]:
        """Copy the stylesheet and the script/image trees into the output directory."""
        self.logger.debug("Copying static files")
        outputdir = self._require_outputdir()
        copied: List[Path] = []

        sources = [self.template_dir / STYLESHEET]
        for asset_dir in ASSET_DIRS:
            root = self.template_dir / asset_dir
            if not root.is_dir():
                continue
            for path in sorted(root.rglob("*")):
                relative = path.relative_to(self.template_dir)
                if any(part.startswith(".") for part in relative.parts):
                    continue
                if path.is_dir():
                    continue
                sources.append(path)

        for source in sources:
            destination = outputdir / source.relative_to(self.template_dir)
            if self.options.dry_run:
                self.logger.debug("  would copy %s to %s", source, destination)
            else:
                destination.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(source, destination)
            copied.append(destination)
        return copied

    def generate_index(self) -> List[Tuple[Path, int]]:
        """Render the site index, if the template provides one."""
        if not self.renderer.has_template(INDEX_TEMPLATE):
            return []
        self.logger.debug("Rendering the index page...")
        self.renderer.check_template(INDEX_TEMPLATE, IndexContext.binding_names())

        outputdir = self._require_outputdir()
        outfile = outputdir / "index.html"
        context = IndexContext(
            options=self.options,
            files=self.files,
            classes=self.classes,
            modsort=self.modsort,
            methods=self.methods,
            main_page=self._main_page(),
            rel_prefix=".",
            stylesheet_href=self._stylesheet_href("."),
        )
        return [(outfile, self.renderer.render(INDEX_TEMPLATE, context, outfile))]

    def generate_class_files(self) -> List[Tuple[Path, int]]:
        """Render one page per documented class or module."""
        if not self.renderer.has_template(CLASS_TEMPLATE):
            return []
        outputdir = self._require_outputdir()
        self.logger.debug("Generating class documentation in %s", outputdir)
        self.renderer.check_template(CLASS_TEMPLATE, ClassPageContext.binding_names())

        rendered: List[Tuple[Path, int]] = []
        for klass in self.modsort:
            self.logger.debug("  working on %s (%s)", klass.full_name, klass.path)
            outfile = outputdir / klass.path
            rel_prefix = _relative_prefix(outputdir, outfile)
            context = ClassPageContext(
                options=self.options,
                files=self.files,
                classes=self.classes,
                modsort=self.modsort,
                klass=klass,
                svninfo=get_revision_info(klass.constants),
                outfile=outfile,
                rel_prefix=rel_prefix,
                stylesheet_href=self._stylesheet_href(rel_prefix),
            )
            self.logger.debug("  rendering %s", outfile)
            rendered.append((outfile, self.renderer.render(CLASS_TEMPLATE, context, outfile)))
        return rendered

    def generate_file_files(self) -> List[Tuple[Path, int]]:
        """Render one page per source file."""
        if not self.renderer.has_template(FILE_TEMPLATE):
            return []
        outputdir = self._require_outputdir()
        self.logger.debug("Generating file documentation in %s", outputdir)
        self.renderer.check_template(FILE_TEMPLATE, FilePageContext.binding_names())

        rendered: List[Tuple[Path, int]] = []
        for source_file in self.files:
            outfile = outputdir / source_file.path
            self.logger.debug("  working on %s (%s)", source_file.full_name, outfile)
            rel_prefix = _relative_prefix(outputdir, outfile)
            context = FilePageContext(
                options=self.options,
                files=self.files,
                classes=self.classes,
                modsort=self.modsort,
                file=source_file,
                cvs_url=cvs_url(self.options.webcvs, source_file.full_name) if self.options.webcvs else None,
                outfile=outfile,
                rel_prefix=rel_prefix,
                stylesheet_href=self._stylesheet_href(rel_prefix),
            )
            self.logger.debug("  rendering %s", outfile)
            rendered.append((outfile, self.renderer.render(FILE_TEMPLATE, context, outfile)))
        return rendered

    # ------------------------------------------------------------------
    # Internal helpers

    def _advance(self, state: GeneratorState) -> None:
        self.state = state
        self.logger.debug("State: %s", state.value)

    def _require_outputdir(self) -> Path:
        if self.outputdir is None:
            raise RuntimeError("generate() must set the output directory first")
        return self.outputdir

    def _stylesheet_href(self, rel_prefix: str) -> str:
        return self.options.stylesheet_url or f"{rel_prefix}/{STYLESHEET}"

    def _main_page(self) -> Optional[Union[Entity, SourceFile]]:
        candidates: Sequence[Union[Entity, SourceFile]] = (*self.files, *self.classes)
        if self.options.main_page:
            for candidate in candidates:
                if candidate.full_name == self.options.main_page:
                    return candidate
            self.logger.warning("Main page %r not found; using the first file", self.options.main_page)
        return self.files[0] if self.files else None


def _relative_prefix(outputdir: Path, outfile: Path) -> str:
    return Path(os.path.relpath(outputdir, outfile.parent)).as_posix()


__all__ = [
    "ASSET_DIRS",
    "CLASS_TEMPLATE",
    "FILE_TEMPLATE",
    "GenerationReport",
    "GeneratorState",
    "INDEX_TEMPLATE",
    "STYLESHEET",
    "SiteGenerator",
]
