"""
File-backed review collection.

Reviews are kept as a single JSON array on disk.  Every append reads
the whole array, adds one record and writes the whole array back.  The
write goes to a temporary file in the same directory which is then
renamed over the collection, so a reader only ever sees the previous
or the new array, never a partial one.

Appends are serialized by an ``asyncio.Lock`` held across the
load-modify-write sequence.  The lock only covers a single process;
run one writer process per collection file.

If the existing file cannot be read or parsed, ``append`` moves it
aside to ``<name>.corrupt-<timestamp>``, logs a warning and starts a
new, empty collection.  This keeps the service accepting reviews when
the file has been damaged, at the cost of hiding the damaged records
from ``list_all`` until someone restores them by hand.  Set
``REVIEWS_STRICT_LOAD`` to make such appends fail with
``PersistenceError`` instead.
"""

import asyncio
import contextlib
import json
import logging
import os
import tempfile
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Set, Union

from pydantic import ValidationError as PydanticValidationError

from .config import Settings, settings
from .errors import PersistenceError
from ..schemas.review import Review, ReviewCandidate

logger = logging.getLogger(__name__)


class CorruptStoreError(Exception):
    """The collection file exists but is not a readable list of reviews."""


def get_reviews_path(reviews_file: Optional[str] = None) -> Path:
    """Compute the path to the review collection file.

    Absolute paths are used as is.  Relative paths are resolved against
    the package root (``product_reviews_api/``).
    """
    reviews_file = reviews_file or settings.reviews_file
    if os.path.isabs(reviews_file):
        return Path(reviews_file)
    base_dir = Path(__file__).resolve().parent.parent.parent  # product_reviews_api/
    return (base_dir / reviews_file).resolve()


class JsonReviewStore:
    """Append-only review collection stored as one JSON file."""

    def __init__(self, path: Union[str, Path], strict_load: bool = False) -> None:
        self._path = Path(path)
        self._strict_load = strict_load
        self._lock = asyncio.Lock()
        self._last_stamp = 0

    @property
    def path(self) -> Path:
        return self._path

    async def list_all(self) -> List[Review]:
        """Return every stored review in insertion order.

        A missing file is an empty collection.  An unreadable file is
        reported as empty (or raises ``PersistenceError`` in strict
        mode); it is left in place.
        """
        try:
            return await asyncio.to_thread(self._load)
        except CorruptStoreError as e:
            if self._strict_load:
                raise PersistenceError("Review collection is unreadable") from e
            logger.warning("Review collection %s is unreadable, listing as empty: %s", self._path, e)
            return []

    async def list_for_product(self, product_id: str) -> List[Review]:
        reviews = await self.list_all()
        return [r for r in reviews if r.product_id == product_id]

    async def append(self, candidate: ReviewCandidate) -> Review:
        """Store a validated review and return it with ``id`` and ``createdAt`` set.

        Raises ``PersistenceError`` if the collection cannot be written.
        """
        async with self._lock:
            reviews = await asyncio.to_thread(self._load_for_append)
            review = Review(
                id=self._next_id({r.id for r in reviews}),
                product_id=candidate.product_id,
                rating=candidate.rating,
                comment=candidate.comment,
                created_at=datetime.now(timezone.utc),
            )
            reviews.append(review)
            await asyncio.to_thread(self._write_all, reviews)
        logger.debug("Review collection %s now holds %d reviews", self._path, len(reviews))
        return review

    def _next_id(self, existing: Set[str]) -> str:
        # Nanosecond timestamp, forced strictly past the last issued id.
        stamp = max(time.time_ns(), self._last_stamp + 1)
        while str(stamp) in existing:
            stamp += 1
        self._last_stamp = stamp
        return str(stamp)

    def _load(self) -> List[Review]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptStoreError(f"cannot read file: {e}") from e
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStoreError(f"invalid JSON: {e}") from e
        if not isinstance(data, list):
            raise CorruptStoreError(f"expected a JSON array, found {type(data).__name__}")
        try:
            return [Review.model_validate(item) for item in data]
        except PydanticValidationError as e:
            raise CorruptStoreError(f"malformed review record: {e.errors()[0]['msg']}") from e

    def _load_for_append(self) -> List[Review]:
        try:
            return self._load()
        except CorruptStoreError as e:
            if self._strict_load:
                logger.error("Refusing to append to unreadable review collection %s: %s", self._path, e)
                raise PersistenceError("Review collection is unreadable") from e
            self._quarantine(str(e))
            return []

    def _quarantine(self, reason: str) -> None:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        target = self._path.with_name(f"{self._path.name}.corrupt-{stamp}")
        try:
            os.replace(self._path, target)
        except OSError as e:
            logger.warning(
                "Review collection %s is unreadable (%s) and could not be moved aside (%s); "
                "starting a new collection over it",
                self._path,
                reason,
                e,
            )
            return
        logger.warning(
            "Review collection %s is unreadable (%s); moved to %s and starting a new collection",
            self._path,
            reason,
            target,
        )

    def _write_all(self, reviews: List[Review]) -> None:
        payload = json.dumps([r.to_record() for r in reviews], indent=2, ensure_ascii=False)
        tmp_path = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except OSError as e:
            logger.error("Failed to write review collection %s: %s", self._path, e)
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.remove(tmp_path)
            raise PersistenceError() from e


def build_review_store(config: Settings = settings) -> JsonReviewStore:
    """Create the store configured by ``REVIEWS_FILE`` and ``REVIEWS_STRICT_LOAD``."""
    return JsonReviewStore(get_reviews_path(config.reviews_file), strict_load=config.reviews_strict_load)
