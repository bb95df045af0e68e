"""Content store backed by a directory of files with YAML front matter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from atomfeed.core.exceptions import InvalidRecordError
from atomfeed.core.types import ContentRecord
from atomfeed.infra.repository.memory import MemoryContentStore

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"

SUFFIX_TYPES = {
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".html": "text/html",
    ".txt": "text/plain",
}

_RECORD_KEYS = set(ContentRecord.model_fields) | {"draft.of"}


def split_frontmatter(raw: str) -> tuple[dict[str, Any], str]:
    """Split a file into its YAML front matter mapping and its body.

    Files without a leading ``---`` line have no front matter.
    """
    lines = raw.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return {}, raw

    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIMITER:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            break
    else:
        msg = "Unterminated front matter block"
        raise ValueError(msg)

    data = yaml.safe_load(header) or {}
    if not isinstance(data, dict):
        msg = f"Front matter must be a mapping, got {type(data).__name__}"
        raise ValueError(msg)
    return data, body


class DirectoryContentStore(MemoryContentStore):
    """Loads every supported file under ``root`` as a content record.

    The record title comes from the ``title`` front matter key, falling back
    to the file stem. Keys that are not record fields are ignored.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        super().__init__()
        if not self.root.is_dir():
            msg = f"Content directory not found: {self.root}"
            raise FileNotFoundError(msg)

        for path in sorted(self.root.rglob("*")):
            if path.is_file() and path.suffix.lower() in SUFFIX_TYPES:
                record = self._load_record(path)
                if record.title in self:
                    msg = f"Duplicate record title {record.title!r} in {path}"
                    raise InvalidRecordError(msg)
                self.add(record)

        logger.info("Loaded %d records from %s", len(self), self.root)

    def _load_record(self, path: Path) -> ContentRecord:
        try:
            data, body = split_frontmatter(path.read_text(encoding="utf-8"))
        except (ValueError, yaml.YAMLError) as e:
            msg = f"Invalid front matter in {path}: {e}"
            raise InvalidRecordError(msg) from e

        fields = {key: value for key, value in data.items() if key in _RECORD_KEYS}
        if ignored := sorted(str(key) for key in data if key not in _RECORD_KEYS):
            logger.debug("Ignoring front matter keys %s in %s", ", ".join(ignored), path)
        fields.setdefault("title", path.stem)
        fields.setdefault("type", SUFFIX_TYPES[path.suffix.lower()])
        fields["text"] = body

        try:
            return ContentRecord.model_validate(fields)
        except ValidationError as e:
            msg = f"Invalid record in {path}: {e}"
            raise InvalidRecordError(msg) from e
