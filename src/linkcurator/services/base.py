"""BaseService — shared foundation for linkcurator services.

Every service receives the frozen :class:`CuratorSettings` at
construction time and reads its section (``curator``, ``generator``)
from there. Services never print; they return ServiceResult.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linkcurator.config.settings import CuratorSettings


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class CuratorService(BaseService):
            async def scan(self) -> ServiceResult:
                ...
    """

    def __init__(self, settings: CuratorSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> CuratorSettings:
        return self._settings
