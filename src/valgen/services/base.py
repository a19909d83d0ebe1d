"""BaseService — shared foundation for valgen services.

Every service receives the resolved :class:`ValgenSettings`. The message
catalog is loaded lazily, so commands that never render messages never
read catalog files.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from valgen.infrastructure.locales import load_catalog
from valgen.services.result import ServiceResult

if TYPE_CHECKING:
    from valgen.config.settings import ValgenSettings
    from valgen.domain.errors import ValgenError
    from valgen.domain.messages import MessageCatalog

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class GenerateService(BaseService):
            def generate(self, ...) -> ServiceResult:
                messages = self.catalog.templates(self.locale(None))
                ...
    """

    def __init__(self, settings: ValgenSettings) -> None:
        self._settings = settings
        self._catalog: MessageCatalog | None = None

    @property
    def catalog(self) -> MessageCatalog:
        """The message catalog (loaded on first access).

        Raises:
            CatalogError: The configured user catalog is invalid.
        """
        if self._catalog is None:
            self._catalog = load_catalog(self._settings.catalog_path)
        return self._catalog

    def locale(self, override: str | None) -> str:
        return override or self._settings.generate.locale

    @staticmethod
    def _failure(op: str, exc: ValgenError) -> ServiceResult:
        """Convert a compiler error into a failed ServiceResult."""
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult.failure(op, exc)
