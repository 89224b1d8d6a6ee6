"""
Durable cart slot and the adapter that loads/saves cart lines through it.

The slot holds one JSON array of line records. It is a best-effort mirror
of the in-memory cart: read once at startup, overwritten after every change.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from storefront.config import Settings
from storefront.db import RedisKeys, get_redis_sync
from storefront.logging import get_logger

from .models import LineItem

logger = get_logger(__name__)


class CartSlot(Protocol):
    """A single named key holding the serialized cart."""

    def read(self) -> Optional[str]: ...

    def write(self, blob: str) -> None: ...


class MemoryCartSlot:
    """In-process slot (tests, throwaway sessions)."""

    def __init__(self, blob: Optional[str] = None):
        self.blob = blob
        self.writes = 0

    def read(self) -> Optional[str]:
        return self.blob

    def write(self, blob: str) -> None:
        self.blob = blob
        self.writes += 1


class FileCartSlot:
    """JSON file on local disk, replaced atomically on write."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, blob: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".cart-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise


class RedisCartSlot:
    """Upstash Redis key `cart:{slot}`."""

    def __init__(self, redis, slot: str = "cart"):
        self.redis = redis
        self.key = RedisKeys.cart_key(slot)

    def read(self) -> Optional[str]:
        return self.redis.get(self.key)

    def write(self, blob: str) -> None:
        self.redis.set(self.key, blob)


class CartStorage:
    """Loads and saves cart lines through a slot, never raising."""

    def __init__(self, slot: CartSlot):
        self.slot = slot

    def load_items(self) -> List[LineItem]:
        """
        Read saved lines. Malformed data of any kind means "no saved cart".

        Prices are repaired to >= 0 (unparseable prices become 0 and the
        line is kept). Records that are not objects or have no product id
        are skipped.
        """
        try:
            blob = self.slot.read()
        except Exception as e:
            logger.warning(f"Failed to read saved cart: {e}")
            return []

        if not blob:
            return []

        try:
            payload = json.loads(blob)
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            logger.warning(f"Corrupted saved cart, starting empty: {e}")
            return []

        if not isinstance(payload, list):
            logger.warning(f"Saved cart is not a list ({type(payload).__name__}), starting empty")
            return []

        items: List[LineItem] = []
        skipped = 0
        for record in payload:
            if not isinstance(record, dict):
                skipped += 1
                continue
            try:
                items.append(LineItem.from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                skipped += 1
                logger.debug(f"Skipping saved cart record: {e}")

        if skipped:
            logger.warning(f"Skipped {skipped} malformed saved cart record(s)")
        return items

    def save_items(self, items: Sequence[LineItem]) -> bool:
        """Overwrite the slot with the full collection. Failures are logged."""
        blob = json.dumps([item.to_dict() for item in items], ensure_ascii=False)
        try:
            self.slot.write(blob)
            return True
        except Exception as e:
            logger.warning(f"Failed to persist cart: {e}")
            return False


def create_cart_slot(settings: Settings) -> CartSlot:
    """Pick the slot backend configured by CART_STORAGE."""
    if settings.cart_storage == "redis":
        return RedisCartSlot(get_redis_sync(settings), settings.cart_slot)
    if settings.cart_storage == "memory":
        return MemoryCartSlot()
    return FileCartSlot(settings.cart_file_path)
