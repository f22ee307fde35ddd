"""Generator options and configuration loading (.docsite.yml)."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import yaml

CONFIG_FILENAME = ".docsite.yml"
DEFAULT_TEMPLATE = "default"
BUILTIN_TEMPLATES_DIR = Path(__file__).with_name("templates")


class ConfigError(RuntimeError):
    """Raised when configuration is unusable or a template cannot be found."""


@dataclass(frozen=True)
class GeneratorOptions:
    """Options fixed for the duration of a generation run."""

    op_dir: Path = Path("doc")
    template: str = DEFAULT_TEMPLATE
    title: Optional[str] = None
    charset: str = "utf-8"
    stylesheet_url: Optional[str] = None
    tab_width: int = 8
    show_hash: bool = False
    hyperlink_all: bool = False
    line_numbers: bool = False
    main_page: Optional[str] = None
    webcvs: Optional[str] = None
    dry_run: bool = False
    class_dir: Optional[str] = None
    file_dir: Optional[str] = None
    template_paths: Tuple[Path, ...] = ()

    def merged(self, overrides: Mapping[str, Any]) -> "GeneratorOptions":
        """Return a copy with every non-``None`` override applied."""
        known = {item.name for item in fields(self)}
        changes = {key: value for key, value in overrides.items() if key in known and value is not None}
        return replace(self, **changes) if changes else self


def load_config(config_path: Path, base: GeneratorOptions | None = None) -> GeneratorOptions:
    """Load options from ``.docsite.yml``, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent
    options = base or GeneratorOptions()

    if not config_file.exists():
        return options

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    op_dir = _as_str(data.get("op_dir"))
    charset = _as_str(data.get("charset"))
    if charset is not None:
        check_charset(charset)
    tab_width = _as_int(data.get("tab_width"))
    if tab_width is not None and tab_width < 1:
        raise ConfigError(f"tab_width must be positive, got {tab_width}")

    template_paths = tuple(
        _resolve_relative(root, raw) for raw in _as_str_list(data.get("template_paths"))
    )

    return options.merged(
        {
            "op_dir": _resolve_relative(root, op_dir) if op_dir else None,
            "template": _as_str(data.get("template")),
            "title": _as_str(data.get("title")),
            "charset": charset,
            "stylesheet_url": _as_str(data.get("stylesheet_url")),
            "tab_width": tab_width,
            "show_hash": _as_bool(data.get("show_hash")),
            "hyperlink_all": _as_bool(data.get("hyperlink_all")),
            "line_numbers": _as_bool(data.get("line_numbers")),
            "main_page": _as_str(data.get("main_page")),
            "webcvs": _as_str(data.get("webcvs")),
            "dry_run": _as_bool(data.get("dry_run")),
            "class_dir": _as_str(data.get("class_dir")),
            "file_dir": _as_str(data.get("file_dir")),
            "template_paths": template_paths or None,
        }
    )


def resolve_template_dir(options: GeneratorOptions) -> Path:
    """Locate the directory holding ``options.template``.

    User-supplied ``template_paths`` are searched before the bundled templates.
    """
    for search_dir in (*options.template_paths, BUILTIN_TEMPLATES_DIR):
        candidate = Path(search_dir).expanduser() / options.template
        if candidate.is_dir():
            return candidate.resolve()
    raise ConfigError(f"could not find template {options.template!r}")


def check_charset(charset: str) -> str:
    """Return the canonical codec name for ``charset`` or raise ``ConfigError``."""
    try:
        return codecs.lookup(charset).name
    except LookupError:
        raise ConfigError(f"unknown charset {charset!r}") from None


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _resolve_relative(root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else root / path


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "BUILTIN_TEMPLATES_DIR",
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_TEMPLATE",
    "GeneratorOptions",
    "check_charset",
    "load_config",
    "resolve_template_dir",
]
