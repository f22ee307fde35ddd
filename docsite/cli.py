"""CLI entrypoint for docsite."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict

from .config import CONFIG_FILENAME, ConfigError, GeneratorOptions, load_config
from .errors import GeneratorError
from .loader import ModelError, load_model
from .logging import configure_logging
from .registry import available_generators, get_generator


def _positive_int(value: str) -> int:
    try:
        number = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid decimal integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError("tab width must be positive")
    return number


def add_generator_options(parser: argparse.ArgumentParser) -> None:
    """Register the HTML generator's options on ``parser``.

    Flags default to ``None`` so that only options given on the command line
    override values from the configuration file.
    """
    group = parser.add_argument_group("HTML generator options")
    group.add_argument(
        "-c",
        "--charset",
        help="Character set (and output encoding) of the generated HTML.",
    )
    group.add_argument(
        "-A",
        "--hyperlink-all",
        action="store_true",
        default=None,
        help=(
            "Hyperlink every word that matches a known method name, even if it "
            "does not start with '#' or '::' (legacy behaviour)."
        ),
    )
    group.add_argument(
        "-N",
        "--line-numbers",
        action="store_true",
        default=None,
        help="Number every line of source listings.",
    )
    group.add_argument(
        "-m",
        "--main",
        dest="main_page",
        metavar="NAME",
        help="File, class or module shown as the landing page.",
    )
    group.add_argument(
        "-H",
        "--show-hash",
        action="store_true",
        default=None,
        help="Keep the leading '#' on hyperlinked instance method names.",
    )
    group.add_argument(
        "-s",
        "--style",
        dest="stylesheet_url",
        metavar="URL",
        help="Stylesheet URL to use instead of the template's stylesheet.",
    )
    group.add_argument(
        "-w",
        "--tab-width",
        type=_positive_int,
        metavar="WIDTH",
        help="Width of tab characters in source listings.",
    )
    group.add_argument(
        "-T",
        "--template",
        metavar="NAME",
        help="Template used to generate output (default: 'default').",
    )
    group.add_argument(
        "-t",
        "--title",
        help="Title for the generated HTML.",
    )
    group.add_argument(
        "-W",
        "--webcvs",
        metavar="URL",
        help=(
            "URL of a web frontend to version control. A '%%s' in the URL is "
            "replaced by the file name; otherwise the name is appended."
        ),
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsite",
        description="Generate a static HTML documentation site from an extracted model.",
    )
    parser.add_argument("model", help="YAML or JSON dump of the extracted classes and files.")
    parser.add_argument(
        "-o",
        "--op-dir",
        metavar="DIR",
        help="Output directory, relative to the working directory (default: doc).",
    )
    parser.add_argument(
        "--config",
        default=".",
        metavar="PATH",
        help=f"Configuration file or directory holding {CONFIG_FILENAME} (default: .).",
    )
    parser.add_argument(
        "-f",
        "--format",
        default="html",
        help="Output generator to use (default: html).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Run every step but write nothing to disk.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress for every page rendered.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        metavar="PATH",
        help="Also write the full debug trail to PATH.",
    )
    add_generator_options(parser)
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "op_dir": Path(args.op_dir) if args.op_dir else None,
        "charset": args.charset,
        "hyperlink_all": args.hyperlink_all,
        "line_numbers": args.line_numbers,
        "main_page": args.main_page,
        "show_hash": args.show_hash,
        "stylesheet_url": args.stylesheet_url,
        "tab_width": args.tab_width,
        "template": args.template,
        "title": args.title,
        "webcvs": args.webcvs,
        "dry_run": args.dry_run,
    }


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docsite."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logger = configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file)

    try:
        generator_cls = get_generator(args.format)
    except KeyError:
        parser.exit(1, f"Unknown format {args.format!r}; choose from {', '.join(available_generators())}\n")

    try:
        options = load_config(Path(args.config)).merged(_overrides(args))
        model = load_model(Path(args.model), options)
        generator = generator_cls(options)
        report = generator.generate(model.files, model.classes)
    except (ConfigError, ModelError) as exc:
        parser.exit(1, f"{exc}\n")
    except GeneratorError as exc:
        parser.exit(1, f"docsite failed: {exc}\nRun with --verbose for more details.\n")
    except (OSError, ValueError) as exc:
        parser.exit(1, f"docsite failed: {exc}\n")

    if report.dry_run:
        logger.info("Dry run: %d pages (%d bytes) not written", len(report.pages), report.total_length)
    else:
        print(f"Documentation written to {_relativize(report.output_dir)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
