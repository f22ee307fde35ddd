from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from docsite.models import Entity, SourceFile
from tests._fixtures.site_builder import SiteBuilder, sample_classes, sample_files


@pytest.fixture(autouse=True)
def _restore_docsite_logger() -> Iterator[None]:
    """Undo handler changes made by configure_logging so caplog keeps working."""
    logger = logging.getLogger("docsite")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def site_builder(tmp_path: Path) -> SiteBuilder:
    """Provide a template/workdir builder rooted at the pytest tmp_path."""
    return SiteBuilder(tmp_path)


@pytest.fixture
def classes() -> tuple[Entity, ...]:
    return sample_classes()


@pytest.fixture
def files(classes: tuple[Entity, ...]) -> tuple[SourceFile, ...]:
    return sample_files(classes)
