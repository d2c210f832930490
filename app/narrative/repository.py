"""Corpus loading.

The built-in English corpus is used unless ``TEMPLATE_CORPUS_PATH`` points at
a JSON file (a list of template records), in which case that file replaces
it.  Records are validated with pydantic before any template is built.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from app.config import get_settings
from app.narrative.comparator import Direction, Relation
from app.narrative.corpus_en import DEFAULT_TEMPLATES
from app.narrative.dimensions import DimensionKey
from app.narrative.templates import Scope, Section, Template, TemplateRepository, Variance

logger = structlog.get_logger(__name__)


class TemplateRecord(BaseModel):
    """On-disk shape of a single template."""

    id: str
    section: Section
    text: str
    dimension: DimensionKey | None = None
    relation: Relation | None = None
    direction: Direction | None = None
    variance: Variance | None = None
    scope: Scope = Scope.DIMENSION

    def to_template(self) -> Template:
        return Template(
            id=self.id,
            section=self.section,
            text=self.text,
            dimension=self.dimension,
            relation=self.relation,
            direction=self.direction,
            variance=self.variance,
            scope=self.scope,
        )


_RECORDS = TypeAdapter(list[TemplateRecord])


def load_templates_file(path: str | Path) -> tuple[Template, ...]:
    """Read and validate a JSON corpus file.

    Raises
    ------
    ValueError
        If the file is not valid JSON or a record fails validation.
    """
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        records = _RECORDS.validate_python(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ValueError(f"Invalid template corpus {path}: {exc}") from exc

    logger.info("templates.corpus_file_loaded", path=str(path), count=len(records))
    return tuple(r.to_template() for r in records)


def dump_templates(templates) -> list[dict]:
    """Serialise templates into the JSON corpus shape."""
    return [t.to_dict() for t in templates]


@lru_cache(maxsize=1)
def get_template_repository() -> TemplateRepository:
    """Return the process-wide template repository (built once)."""
    settings = get_settings()
    if settings.TEMPLATE_CORPUS_PATH:
        templates = load_templates_file(settings.TEMPLATE_CORPUS_PATH)
        source = settings.TEMPLATE_CORPUS_PATH
    else:
        templates = DEFAULT_TEMPLATES
        source = "builtin:en"

    repository = TemplateRepository(templates)
    logger.info("templates.repository_ready", source=source, count=len(repository))
    return repository
