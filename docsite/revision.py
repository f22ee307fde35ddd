"""Extraction of "last changed" details from embedded revision tags."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Iterable, Optional

from .duration import time_delta_string
from .models import Constant, RevisionInfo

# e.g. "$Id: foo.rb 52 2009-01-07 02:08:11Z deveiant $"
REVISION_TAG_PATTERN = re.compile(
    r"""
    \$Id:\s
    (\S+)\s                 # filename
    (\d+)\s                 # revision
    (\d{4}-\d{2}-\d{2})\s   # date (YYYY-MM-DD)
    (\d{2}:\d{2}:\d{2}Z)\s  # time (HH:MM:SSZ)
    (\w+)\s                 # committer
    \$$
    """,
    re.VERBOSE,
)

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%SZ"


def get_revision_info(
    constants: Iterable[Constant] | None, *, now: datetime | None = None
) -> Optional[RevisionInfo]:
    """Return revision details from the first constant holding an ``$Id$`` tag.

    ``None`` is returned when no constant matches. A tag whose date or time
    cannot be parsed raises :class:`ValueError`.
    """
    if not constants:
        return None

    match = None
    for constant in constants:
        match = REVISION_TAG_PATTERN.search(constant.value or "")
        if match:
            break
    if match is None:
        return None

    filename, rev, date, time, committer = match.groups()
    commitdate = datetime.strptime(f"{date} {time}", _TIMESTAMP_FORMAT).replace(tzinfo=UTC)
    reference = now or datetime.now(UTC)
    elapsed = max(0, int((reference - commitdate).total_seconds()))

    return RevisionInfo(
        filename=filename,
        rev=int(rev),
        commitdate=commitdate,
        commitdelta=time_delta_string(elapsed),
        committer=committer,
    )


__all__ = ["REVISION_TAG_PATTERN", "get_revision_info"]
