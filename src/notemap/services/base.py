"""BaseService — abstract foundation for notemap services.

Every service receives the resolved :class:`NotemapSettings` at
construction time and reads its config sections from there.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from notemap.config.settings import NotemapSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class StyleService(BaseService):
            def rewrite(self, document, access_token) -> ServiceResult:
                ...
    """

    def __init__(self, settings: NotemapSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> NotemapSettings:
        return self._settings
