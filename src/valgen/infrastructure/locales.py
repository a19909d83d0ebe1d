"""Locale catalog loading.

The packaged catalog (``valgen/locales/catalog.json``) maps
``locale -> rule name -> template``. A project may layer its own catalog
file of the same shape on top, to translate or reword messages.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from valgen.domain.errors import CatalogError
from valgen.domain.messages import MessageCatalog

logger = logging.getLogger(__name__)

CATALOG_RESOURCE = "locales/catalog.json"

_CATALOG_SHAPE: TypeAdapter[dict[str, dict[str, str]]] = TypeAdapter(dict[str, dict[str, str]])


def load_catalog(override: Path | None = None) -> MessageCatalog:
    """Load the packaged catalog, layering *override* on top when given.

    Raises:
        CatalogError: *override* is missing, not JSON, or not a
            ``locale -> rule -> template`` mapping.
    """
    raw = resources.files("valgen").joinpath(CATALOG_RESOURCE).read_text(encoding="utf-8")
    catalog = MessageCatalog(_CATALOG_SHAPE.validate_json(raw))
    if override is None:
        return catalog
    logger.debug("Layering message catalog %s", override)
    return catalog.merged(read_catalog_file(override))


def read_catalog_file(path: Path) -> dict[str, dict[str, str]]:
    """Read and validate a user catalog file."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(str(path), str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(str(path), f"invalid JSON: {exc}") from exc
    try:
        return _CATALOG_SHAPE.validate_python(data)
    except ValidationError as exc:
        raise CatalogError(str(path), "expected a locale -> rule -> template mapping") from exc
