"""Helpers for writing throwaway template sets and sample models in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Mapping

from docsite.config import GeneratorOptions
from docsite.generator import SiteGenerator
from docsite.models import Constant, Entity, Method, SourceFile

INDEX_TEMPLATE = """
<h1>{{ options.title }}</h1>
{% for klass in modsort %}
<a href="{{ rel_prefix }}/{{ klass.path }}">{{ klass.full_name }}</a>
{% endfor %}
"""

CLASS_TEMPLATE = """
<h1>{{ klass.full_name }}</h1>
<p class="prefix">{{ rel_prefix }}</p>
{% if svninfo %}
<p class="svn">r{{ svninfo.rev }} by {{ svninfo.committer }}</p>
{% endif %}
"""

FILE_TEMPLATE = """
<h1>{{ file.full_name }}</h1>
<p class="prefix">{{ rel_prefix }}</p>
{% if cvs_url %}<a href="{{ cvs_url }}">vcs</a>{% endif %}
"""

PAGE_TEMPLATES = {
    "index.html.j2": INDEX_TEMPLATE,
    "classpage.html.j2": CLASS_TEMPLATE,
    "filepage.html.j2": FILE_TEMPLATE,
}


class SiteBuilder:
    """Writes template directories under ``tmp_path`` and builds generators for them."""

    def __init__(self, tmp_path: Path) -> None:
        self.templates_root = tmp_path / "templates"
        self.workdir = tmp_path / "work"
        self.templates_root.mkdir()
        self.workdir.mkdir()

    def template(
        self,
        name: str = "custom",
        files: Mapping[str, str] | None = None,
        *,
        pages: bool = True,
    ) -> Path:
        """Create template ``name`` with a stylesheet, optional page templates and extra files."""
        root = self.templates_root / name
        root.mkdir(parents=True, exist_ok=True)
        contents = {"style.css": "body { color: black; }\n"}
        if pages:
            contents.update(PAGE_TEMPLATES)
        contents.update(files or {})
        for relative, content in contents.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return root

    def options(self, name: str = "custom", **overrides: Any) -> GeneratorOptions:
        return GeneratorOptions(
            template=name,
            template_paths=(self.templates_root,),
            **overrides,
        )

    def generator(self, name: str = "custom", **overrides: Any) -> SiteGenerator:
        return SiteGenerator(self.options(name, **overrides), basedir=self.workdir)

    def output(self, op_dir: str = "doc") -> Path:
        return self.workdir / op_dir


def sample_classes() -> tuple[Entity, ...]:
    """Two namespaces plus an undocumented entity."""
    run = Method(name="run", params="(args)", source="def run(args)\n\tcall(args)\nend", parent="Foo")
    create = Method(name="create", singleton=True, parent="Foo::Bar")
    return (
        Entity(
            full_name="Foo",
            path="Foo.html",
            kind="module",
            methods=(run,),
            description="<p>Entry point; see Foo::Bar and #run.</p>",
        ),
        Entity(
            full_name="Foo::Bar",
            path="Foo/Bar.html",
            methods=(create,),
            constants=(
                Constant(
                    name="SVNId",
                    value="$Id: bar.rb 52 2009-01-07 02:08:11Z deveiant $",
                    parent="Foo::Bar",
                ),
            ),
        ),
        Entity(full_name="Zed", path="Zed.html"),
        Entity(full_name="Hidden", path="Hidden.html", documented=False),
    )


def sample_files(classes: tuple[Entity, ...]) -> tuple[SourceFile, ...]:
    by_name = {entity.full_name: entity for entity in classes}
    return (
        SourceFile(full_name="lib/foo.rb", path="lib/foo_rb.html", entities=(by_name["Foo"],)),
        SourceFile(full_name="lib/foo/bar.rb", path="lib/foo/bar_rb.html", entities=(by_name["Foo::Bar"],)),
    )


__all__ = ["PAGE_TEMPLATES", "SiteBuilder", "sample_classes", "sample_files"]
