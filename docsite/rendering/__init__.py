"""Template rendering for generated pages."""

from .contexts import ClassPageContext, FilePageContext, IndexContext, RenderContext
from .crossref import CrossReferencer
from .renderer import TemplateRenderer

__all__ = [
    "ClassPageContext",
    "CrossReferencer",
    "FilePageContext",
    "IndexContext",
    "RenderContext",
    "TemplateRenderer",
]
