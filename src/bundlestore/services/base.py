"""BaseService — abstract foundation for bundlestore services.

Every service receives a :class:`Store` at construction time. Services
own their transaction boundaries via ``self._store.transaction()`` and
pass the yielded connection to repositories explicitly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bundlestore.infrastructure.store import Store


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class AssociationService(BaseService):
            def associate(self, domain_id: int, trust_bundle_id: int) -> ServiceResult:
                with self._store.transaction() as conn:
                    ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store
