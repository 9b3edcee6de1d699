"""
Mall service for role-gated mall and store operations.

Handles:
- Mall open/close toggling (admin), cascading closure to the mall's stores
- Store open/close toggling (manager), refused while the mall is closed
- Store detail updates (store users)
- Read access to the mall collection and the flattened store projection
"""
import logging
import random
from typing import Any, Dict, List, Optional, Union

from fastapi import Depends
from pydantic import ValidationError

from app.core.datastore import MallRepository, get_repository
from app.core.exceptions import InvalidOperation, NotFound, ValidationFailure
from app.core.permissions import (
    ALL_ROLES,
    TOGGLE_MALL_ROLES,
    TOGGLE_STORE_ROLES,
    UPDATE_STORE_ROLES,
    authorize,
)
from app.models.mall import Mall, Store, StoreContact
from app.schemas.mall import StoreUpdate
from app.schemas.user import CurrentUser
from app.utils.spatial import Coordinate, filter_within_radius

logger = logging.getLogger(__name__)

# Store fields a store user may overwrite; contact fields are handled separately
UPDATABLE_STORE_FIELDS = ("name", "description", "opening_hours", "type")
UPDATABLE_CONTACT_FIELDS = ("phone", "email", "website")


class MallService:
    """Service for mall and store operations over a MallRepository."""

    def __init__(self, repository: MallRepository):
        """
        Initialize mall service.

        Args:
            repository: Mall repository holding the dataset
        """
        self.repository = repository

    # ========================================================================
    # Lookups
    # ========================================================================

    def _get_mall(self, mall_id: int) -> Mall:
        mall = self.repository.find_mall(mall_id)
        if mall is None:
            raise NotFound("Mall not found")
        return mall

    def _get_store(self, mall: Mall, store_id: int) -> Store:
        found = self.repository.find_store(store_id, mall_id=mall.id)
        if found is None:
            raise NotFound("Store not found")
        return found[0]

    # ========================================================================
    # Mutations
    # ========================================================================

    def toggle_mall(self, mall_id: int, caller: Optional[CurrentUser]) -> Dict[str, Any]:
        """
        Open or close a mall.

        Closing a mall closes every store in it. Opening a mall leaves its
        stores in whatever state they are.

        Args:
            mall_id: Mall id
            caller: Authenticated caller (admin)

        Returns:
            Dict with the mall's id, name and isOpen

        Raises:
            Unauthenticated, Forbidden: From the access gate
            NotFound: If the mall does not exist
            PersistenceFailure: If the change could not be saved
        """
        authorize(caller, TOGGLE_MALL_ROLES)

        with self.repository.lock:
            mall = self._get_mall(mall_id)

            mall.is_open = not mall.is_open
            if not mall.is_open:
                for store in mall.stores:
                    store.is_open = False

            self.repository.persist()

        logger.info(
            f"Mall {'opened' if mall.is_open else 'closed'}: mall_id={mall.id}, by={caller.username}"
        )

        return {"id": mall.id, "name": mall.name, "isOpen": mall.is_open}

    def toggle_store(self, mall_id: int, store_id: int, caller: Optional[CurrentUser]) -> Dict[str, Any]:
        """
        Open or close a single store.

        Args:
            mall_id: Owning mall id
            store_id: Store id
            caller: Authenticated caller (manager)

        Returns:
            Dict with the store's id, name, isOpen and mallId

        Raises:
            Unauthenticated, Forbidden: From the access gate
            NotFound: If the mall or store does not exist
            InvalidOperation: If the store is closed and its mall is closed
            PersistenceFailure: If the change could not be saved
        """
        authorize(caller, TOGGLE_STORE_ROLES)

        with self.repository.lock:
            mall = self._get_mall(mall_id)
            store = self._get_store(mall, store_id)

            if not store.is_open and not mall.is_open:
                raise InvalidOperation(
                    "Cannot open store while mall is closed. Please open the mall first."
                )

            store.is_open = not store.is_open
            self.repository.persist()

        logger.info(
            f"Store {'opened' if store.is_open else 'closed'}: "
            f"store_id={store.id}, mall_id={mall.id}, by={caller.username}"
        )

        return {"id": store.id, "name": store.name, "isOpen": store.is_open, "mallId": mall.id}

    def update_store(
        self,
        mall_id: int,
        store_id: int,
        patch: Union[StoreUpdate, Dict[str, Any]],
        caller: Optional[CurrentUser],
    ) -> Dict[str, Any]:
        """
        Update a store's descriptive fields.

        Only recognized fields are applied and only when the provided value
        is truthy: an empty string leaves the current value untouched.

        Args:
            mall_id: Owning mall id
            store_id: Store id
            patch: StoreUpdate or a raw dict of fields
            caller: Authenticated caller (store)

        Returns:
            The updated store record plus mallId and mallName

        Raises:
            Unauthenticated, Forbidden: From the access gate
            NotFound: If the mall or store does not exist
            PersistenceFailure: If the change could not be saved
        """
        authorize(caller, UPDATE_STORE_ROLES)

        if not isinstance(patch, StoreUpdate):
            try:
                patch = StoreUpdate.model_validate(patch)
            except ValidationError as e:
                raise ValidationFailure(f"Invalid store update: {e}") from e

        with self.repository.lock:
            mall = self._get_mall(mall_id)
            store = self._get_store(mall, store_id)

            changed = []
            for field in UPDATABLE_STORE_FIELDS:
                value = getattr(patch, field)
                if value:
                    setattr(store, field, value)
                    changed.append(field)

            if patch.contact is not None:
                for field in UPDATABLE_CONTACT_FIELDS:
                    value = getattr(patch.contact, field)
                    if value:
                        if store.contact is None:
                            store.contact = StoreContact()
                        setattr(store.contact, field, value)
                        changed.append(f"contact.{field}")

            self.repository.persist()

        logger.info(
            f"Store updated: store_id={store.id}, mall_id={mall.id}, "
            f"fields={changed or 'none'}, by={caller.username}"
        )

        record = store.model_dump(by_alias=True, exclude_none=True)
        record["mallId"] = mall.id
        record["mallName"] = mall.name
        return record

    # ========================================================================
    # Reads
    # ========================================================================

    def list_malls(self, caller: Optional[CurrentUser]) -> List[Dict[str, Any]]:
        """Return the full mall collection to any recognized role."""
        authorize(caller, ALL_ROLES)
        return self.repository.snapshot()

    def list_public_malls(self) -> List[Dict[str, Any]]:
        """Return the mall collection for the public, read-only map."""
        return self.repository.snapshot()

    def list_stores_flattened(self, rng: Optional[random.Random] = None) -> List[Dict[str, Any]]:
        """Return every store flattened with display coordinates."""
        with self.repository.lock:
            return list(self.repository.flatten_stores(rng=rng))

    def find_nearby_stores(
        self,
        latitude: float,
        longitude: float,
        radius_meters: float,
        rng: Optional[random.Random] = None,
    ) -> List[Dict[str, Any]]:
        """
        Return flattened stores whose display coordinates fall within a radius.

        Args:
            latitude: Center latitude
            longitude: Center longitude
            radius_meters: Search radius in meters
            rng: Random source for the display offsets

        Returns:
            Matching flattened stores, in dataset order
        """
        stores = self.list_stores_flattened(rng=rng)
        return filter_within_radius(stores, Coordinate(latitude, longitude), radius_meters)


def get_mall_service(repository: MallRepository = Depends(get_repository)) -> MallService:
    """
    Dependency for getting mall service instance.

    Args:
        repository: Mall repository

    Returns:
        MallService instance
    """
    return MallService(repository)
