"""Tests for docsite.rendering.renderer."""

from __future__ import annotations

from pathlib import Path

import pytest

from docsite.config import GeneratorOptions
from docsite.errors import TemplateEvaluationError
from docsite.models import SourceFile
from docsite.rendering import FilePageContext, TemplateRenderer


def _context(source_file: SourceFile, options: GeneratorOptions, outfile: Path) -> FilePageContext:
    return FilePageContext(
        options=options,
        files=(source_file,),
        classes=(),
        modsort=(),
        file=source_file,
        cvs_url=None,
        outfile=outfile,
        rel_prefix=".",
        stylesheet_href="./style.css",
    )


def _write_template(template_dir: Path, name: str, body: str) -> None:
    template_dir.mkdir(parents=True, exist_ok=True)
    (template_dir / name).write_text(body, encoding="utf-8")


@pytest.fixture
def source_file() -> SourceFile:
    return SourceFile(full_name="lib/foo.rb", path="lib/foo_rb.html")


def test_render_writes_output_and_creates_directories(tmp_path: Path, source_file: SourceFile) -> None:
    template_dir = tmp_path / "tpl"
    _write_template(template_dir, "page.j2", "<h1>{{ file.full_name }}</h1><p>{{ rel_prefix }}</p>")
    options = GeneratorOptions()
    outfile = tmp_path / "out" / "lib" / "foo_rb.html"

    length = TemplateRenderer(template_dir, options).render("page.j2", _context(source_file, options, outfile), outfile)

    assert outfile.read_text(encoding="utf-8") == "<h1>lib/foo.rb</h1><p>.</p>"
    assert length == len("<h1>lib/foo.rb</h1><p>.</p>")


def test_render_truncates_existing_file(tmp_path: Path, source_file: SourceFile) -> None:
    template_dir = tmp_path / "tpl"
    _write_template(template_dir, "page.j2", "short")
    options = GeneratorOptions()
    outfile = tmp_path / "page.html"
    outfile.write_text("a much longer previous body", encoding="utf-8")

    TemplateRenderer(template_dir, options).render("page.j2", _context(source_file, options, outfile), outfile)

    assert outfile.read_text(encoding="utf-8") == "short"


def test_dry_run_reports_length_without_writing(tmp_path: Path, source_file: SourceFile) -> None:
    template_dir = tmp_path / "tpl"
    _write_template(template_dir, "page.j2", "<h1>{{ file.full_name }}</h1>")
    options = GeneratorOptions(dry_run=True)
    outfile = tmp_path / "out" / "page.html"

    length = TemplateRenderer(template_dir, options).render("page.j2", _context(source_file, options, outfile), outfile)

    assert length == len("<h1>lib/foo.rb</h1>")
    assert not outfile.exists()
    assert not outfile.parent.exists()


def test_render_applies_configured_charset(tmp_path: Path, source_file: SourceFile) -> None:
    template_dir = tmp_path / "tpl"
    _write_template(template_dir, "page.j2", "café {{ options.charset }}")
    options = GeneratorOptions(charset="latin-1")
    outfile = tmp_path / "page.html"

    TemplateRenderer(template_dir, options).render("page.j2", _context(source_file, options, outfile), outfile)

    assert outfile.read_bytes() == "café latin-1".encode("latin-1")


def test_render_escapes_bindings(tmp_path: Path) -> None:
    template_dir = tmp_path / "tpl"
    _write_template(template_dir, "page.j2", "{{ file.full_name }}")
    options = GeneratorOptions()
    outfile = tmp_path / "page.html"
    odd = SourceFile(full_name="lib/<script>.rb", path="x.html")

    TemplateRenderer(template_dir, options).render("page.j2", _context(odd, options, outfile), outfile)

    assert outfile.read_text(encoding="utf-8") == "lib/&lt;script&gt;.rb"


def test_undefined_attribute_raises_with_partial_output(tmp_path: Path, source_file: SourceFile) -> None:
    template_dir = tmp_path / "tpl"
    prefix = "<p>" + "a" * 60 + "</p>"
    _write_template(template_dir, "page.j2", prefix + "{{ file.missing_thing }}")
    options = GeneratorOptions()
    outfile = tmp_path / "page.html"

    with pytest.raises(TemplateEvaluationError) as excinfo:
        TemplateRenderer(template_dir, options).render("page.j2", _context(source_file, options, outfile), outfile)

    error = excinfo.value
    assert error.template_path == template_dir / "page.j2"
    assert "missing_thing" in error.message
    assert error.snippet == prefix[-50:]
    assert "Error while evaluating" in str(error)
    assert not outfile.exists()


def test_syntax_errors_are_reported_as_evaluation_errors(tmp_path: Path, source_file: SourceFile) -> None:
    template_dir = tmp_path / "tpl"
    _write_template(template_dir, "page.j2", "{% if %}")
    options = GeneratorOptions()
    outfile = tmp_path / "page.html"

    with pytest.raises(TemplateEvaluationError):
        TemplateRenderer(template_dir, options).render("page.j2", _context(source_file, options, outfile), outfile)


def test_check_template_flags_names_outside_the_context(tmp_path: Path) -> None:
    template_dir = tmp_path / "tpl"
    _write_template(template_dir, "ok.j2", "{% for f in files %}{{ f.full_name }}{% endfor %}{{ cvs_url }}")
    _write_template(template_dir, "bad.j2", "{{ file.full_name }} {{ klass.full_name }} {{ methods }}")
    renderer = TemplateRenderer(template_dir, GeneratorOptions())
    allowed = FilePageContext.binding_names()

    renderer.check_template("ok.j2", allowed)
    with pytest.raises(TemplateEvaluationError, match="klass, methods"):
        renderer.check_template("bad.j2", allowed)


def test_has_template(tmp_path: Path) -> None:
    template_dir = tmp_path / "tpl"
    _write_template(template_dir, "present.j2", "")

    renderer = TemplateRenderer(template_dir, GeneratorOptions())

    assert renderer.has_template("present.j2")
    assert not renderer.has_template("absent.j2")


def test_crossref_filter_is_identity_until_configured(tmp_path: Path, source_file: SourceFile) -> None:
    template_dir = tmp_path / "tpl"
    _write_template(template_dir, "page.j2", "{{ '<b>Foo</b>' | crossref(rel_prefix) }}")
    options = GeneratorOptions()
    outfile = tmp_path / "page.html"

    TemplateRenderer(template_dir, options).render("page.j2", _context(source_file, options, outfile), outfile)

    assert outfile.read_text(encoding="utf-8") == "<b>Foo</b>"


def test_render_reports_encoded_byte_length(tmp_path: Path, source_file: SourceFile) -> None:
    template_dir = tmp_path / "tpl"
    _write_template(template_dir, "page.j2", "café")
    outfile = tmp_path / "page.html"
    options = GeneratorOptions()
    dry_options = GeneratorOptions(dry_run=True)

    length = TemplateRenderer(template_dir, options).render("page.j2", _context(source_file, options, outfile), outfile)
    dry_length = TemplateRenderer(template_dir, dry_options).render(
        "page.j2", _context(source_file, dry_options, outfile), outfile
    )

    assert length == len(outfile.read_bytes()) == 5
    assert dry_length == 5
