# templates.py
# SPDX-License-Identifier: MIT
"""Catalog of canonical license templates.

Templates ship as package data under ``listlicenses/assets``. Each asset is a
small front-matter document::

    ---
    title: MIT License
    spdx-id: MIT
    nickname: Expat
    ---

    <license body>

Only ``title`` and ``nickname`` are read from the header; the body is reduced
to a word set by :func:`listlicenses.core.wordset.normalize`.
"""

from __future__ import annotations

import enum
import functools
from importlib import resources
from pathlib import Path

from .errors import TemplateError
from .interfaces import Template
from .log import get_logger
from .wordset import normalize

log = get_logger(__name__)

__all__ = ["ParseState", "parse_template", "load_templates", "ASSET_SUFFIX"]

ASSET_PACKAGE = "listlicenses"
ASSET_DIR = "assets"
ASSET_SUFFIX = ".txt"
DELIMITER = "---"


class ParseState(enum.Enum):
    """Position of the front-matter parser within a template document."""

    SEEKING_HEADER = "seeking_header"
    IN_HEADER = "in_header"
    IN_BODY = "in_body"


def parse_template(content: str) -> Template:
    """Parse one front-matter template document.

    Lines before the opening ``---`` are ignored. A header that is never
    closed is tolerated: the template keeps whatever title and nickname were
    read and gets an empty word set.

    Args:
        content (str): Full document text.

    Returns:
        Template: Parsed template.
    """
    title = ""
    nickname = ""
    body: list[str] = []
    state = ParseState.SEEKING_HEADER
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if state is ParseState.SEEKING_HEADER:
            if line == DELIMITER:
                state = ParseState.IN_HEADER
        elif state is ParseState.IN_HEADER:
            if line == DELIMITER:
                state = ParseState.IN_BODY
            elif line.startswith("title:"):
                title = line[len("title:"):].strip()
            elif line.startswith("nickname:"):
                nickname = line[len("nickname:"):].strip()
        else:
            body.append(raw_line)
            body.append("\n")
    if state is not ParseState.IN_BODY:
        log.debug("Template %r has no closed header (state=%s)", title, state.value)
    return Template(title=title, nickname=nickname, words=normalize("".join(body)))


def _iter_asset_texts(directory: Path | None):
    if directory is not None:
        entries = sorted(Path(directory).iterdir(), key=lambda p: p.name)
    else:
        root = resources.files(ASSET_PACKAGE) / ASSET_DIR
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    for entry in entries:
        if not entry.name.endswith(ASSET_SUFFIX) or not entry.is_file():
            continue
        yield entry.name, entry.read_text(encoding="utf-8")


@functools.lru_cache(maxsize=None)
def _load_catalog(directory: Path | None) -> tuple[Template, ...]:
    templates: list[Template] = []
    try:
        for name, text in _iter_asset_texts(directory):
            templates.append(parse_template(text))
            log.debug("Loaded license template %s", name)
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateError(f"could not load license templates: {exc}") from exc
    log.debug("License template catalog holds %d templates", len(templates))
    return tuple(templates)


def load_templates(directory: str | Path | None = None) -> list[Template]:
    """Load the license template catalog.

    The packaged catalog is parsed once per process; later calls reuse the
    parsed templates.

    Args:
        directory (str | Path | None): Optional directory of ``*.txt``
            template documents to use instead of the packaged assets.

    Returns:
        list[Template]: Templates in asset filename order.

    Raises:
        TemplateError: If any asset cannot be read.
    """
    key = Path(directory).resolve() if directory is not None else None
    return list(_load_catalog(key))
