"""
JSON-document backed repository for malls and their stores.

The whole dataset lives in memory and is rewritten to disk after every
mutation. Callers compose lookup, mutation and persist under ``lock``.
"""
import copy
import json
import logging
import os
import random
import stat
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from pydantic import TypeAdapter, ValidationError

from app.core.config import settings
from app.core.exceptions import PersistenceFailure
from app.models.mall import Mall, Store

logger = logging.getLogger(__name__)

_malls_adapter = TypeAdapter(List[Mall])

# Served when the data file is missing or unreadable so the app stays demoable
DEFAULT_MALLS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "City Center Mall",
        "latitude": 25.2854,
        "longitude": 51.5310,
        "isOpen": True,
        "stores": [
            {
                "id": 1,
                "name": "Fashion Forward",
                "type": "Clothing",
                "isOpen": True,
                "opening_hours": "10:00 AM - 10:00 PM",
            },
            {
                "id": 2,
                "name": "Tech Hub",
                "type": "Electronics",
                "isOpen": True,
                "opening_hours": "9:00 AM - 11:00 PM",
            },
        ],
    },
    {
        "id": 2,
        "name": "Doha Festival City",
        "latitude": 25.3548,
        "longitude": 51.4326,
        "isOpen": True,
        "stores": [
            {
                "id": 3,
                "name": "Gourmet Corner",
                "type": "Food & Dining",
                "isOpen": False,
                "opening_hours": "11:00 AM - 12:00 AM",
            },
            {
                "id": 4,
                "name": "Book Nook",
                "type": "Books & Media",
                "isOpen": True,
                "opening_hours": "8:00 AM - 10:00 PM",
            },
        ],
    },
]


def synthesize_website(store_name: str) -> str:
    """Build a placeholder website from a store name ("Tech Hub" -> https://techhub.com)."""
    return f"https://{''.join(store_name.lower().split())}.com"


class MallRepository:
    """In-memory mall collection persisted as a single JSON document."""

    def __init__(
        self,
        data_file: Union[str, Path],
        jitter_degrees: float = 0.005,
    ):
        """
        Initialize the repository.

        Args:
            data_file: Path of the JSON document holding the mall array
            jitter_degrees: Max positional offset applied to flattened stores
        """
        self.data_file = Path(data_file)
        self.jitter_degrees = jitter_degrees
        self.lock = threading.RLock()
        self.using_default_dataset = False
        self._malls: List[Mall] = []

    @property
    def malls(self) -> List[Mall]:
        """Live mall list. Mutate only while holding ``lock``."""
        return self._malls

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def load(self) -> List[Mall]:
        """
        Load the dataset from the document.

        Falls back to the built-in default dataset if the file is missing,
        unreadable, not JSON, or does not match the mall schema.

        Returns:
            The loaded mall list
        """
        with self.lock:
            try:
                raw = json.loads(self.data_file.read_text(encoding="utf-8"))
                self._malls = _malls_adapter.validate_python(raw)
                self.using_default_dataset = False
                logger.info(f"Loaded {len(self._malls)} malls from {self.data_file}")
            except (OSError, ValueError, ValidationError) as e:
                logger.warning(
                    f"Could not load mall data from {self.data_file} ({e}); using default dataset"
                )
                self._malls = _malls_adapter.validate_python(copy.deepcopy(DEFAULT_MALLS))
                self.using_default_dataset = True

            return self._malls

    def persist(self) -> None:
        """
        Rewrite the whole document from the in-memory collection.

        Writes to a temporary file next to the document and renames it into
        place. The in-memory state is left as is on failure.

        Raises:
            PersistenceFailure: If the document could not be written
        """
        with self.lock:
            payload = json.dumps(self.to_document(), indent=2, ensure_ascii=False)
            tmp_path = None
            try:
                self.data_file.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(
                    dir=self.data_file.parent,
                    prefix=f".{self.data_file.name}.",
                    suffix=".tmp",
                )
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.chmod(tmp_path, self._document_mode())
                os.replace(tmp_path, self.data_file)
                tmp_path = None
            except OSError as e:
                logger.error(f"Failed to save mall data to {self.data_file}: {e}")
                raise PersistenceFailure("Failed to save changes") from e
            finally:
                if tmp_path and os.path.exists(tmp_path):
                    os.unlink(tmp_path)

            self.using_default_dataset = False
            logger.debug(f"Persisted {len(self._malls)} malls to {self.data_file}")

    def _document_mode(self) -> int:
        """Permission bits for the rewritten document: the current file's, else umask default."""
        try:
            return stat.S_IMODE(self.data_file.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    # ========================================================================
    # Lookups
    # ========================================================================

    def find_mall(self, mall_id: int) -> Optional[Mall]:
        """Return the mall with this id, or None."""
        for mall in self._malls:
            if mall.id == mall_id:
                return mall
        return None

    def find_store(self, store_id: int, mall_id: Optional[int] = None) -> Optional[Tuple[Store, Mall]]:
        """
        Locate a store and its owning mall.

        Args:
            store_id: Store id
            mall_id: Restrict the search to this mall when given

        Returns:
            (store, mall) tuple, or None if not found
        """
        if mall_id is not None:
            mall = self.find_mall(mall_id)
            malls = [mall] if mall else []
        else:
            malls = self._malls

        for mall in malls:
            for store in mall.stores:
                if store.id == store_id:
                    return store, mall
        return None

    # ========================================================================
    # Projections
    # ========================================================================

    def to_document(self) -> List[Dict[str, Any]]:
        """Serialize the collection in its on-disk layout."""
        return [mall.to_document() for mall in self._malls]

    def snapshot(self) -> List[Dict[str, Any]]:
        """Return a detached copy of the collection for readers."""
        with self.lock:
            return self.to_document()

    def flatten_stores(self, rng: Optional[random.Random] = None) -> Iterator[Dict[str, Any]]:
        """
        Yield every store annotated for map display.

        Each record carries its mall's id and name, the mall's coordinates
        shifted by a random offset of up to ``jitter_degrees`` on both axes,
        and a synthesized website/description where the store has none.
        Offsets are re-drawn on every call.

        Args:
            rng: Random source, mainly for tests

        Yields:
            Flattened store dictionaries
        """
        rng = rng or random
        for mall in self._malls:
            for store in mall.stores:
                record = store.model_dump(by_alias=True, exclude_none=True)
                record["mallId"] = mall.id
                record["mallName"] = mall.name
                record["latitude"] = mall.latitude + rng.uniform(-self.jitter_degrees, self.jitter_degrees)
                record["longitude"] = mall.longitude + rng.uniform(-self.jitter_degrees, self.jitter_degrees)
                if not store.description:
                    record["description"] = f"{store.type} store in {mall.name}"
                website = (store.contact.website if store.contact else None) or record.get("website")
                record["website"] = website or synthesize_website(store.name)
                yield record


# Global repository instance
mall_repository = MallRepository(settings.DATA_FILE, jitter_degrees=settings.STORE_JITTER_DEGREES)


def get_repository() -> MallRepository:
    """
    Dependency function to get the mall repository.
    """
    return mall_repository
