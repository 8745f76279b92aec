import logging
from typing import Awaitable, Callable, Dict, List

logger = logging.getLogger(__name__)

Invalidator = Callable[[], Awaitable[None]]

class InvalidationService:
    """Maps watched tables to the cached views derived from them.

    A notification for a table clears every view registered for it. No
    ordering or deduplication is applied: the next read repopulates the view
    from whatever the table holds at that moment.
    """

    def __init__(self) -> None:
        self._views: Dict[str, Dict[str, Invalidator]] = {}

    def register(self, table: str, view: str, invalidator: Invalidator) -> None:
        self._views.setdefault(table, {})[view] = invalidator
        logger.info(f"Registered cache view '{view}' for table '{table}'")

    def views_for(self, table: str) -> List[str]:
        return list(self._views.get(table, {}))

    async def notify(self, table: str) -> List[str]:
        """Invalidate every view derived from the table; returns the cleared view names."""
        views = self._views.get(table)
        if not views:
            logger.debug(f"Ignoring change notification for unwatched table '{table}'")
            return []

        cleared = []
        for name, invalidator in views.items():
            try:
                await invalidator()
                cleared.append(name)
            except Exception as e:
                logger.error(f"Error invalidating '{name}' for table '{table}': {str(e)}")
        return cleared
