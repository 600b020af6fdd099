# listing_editor/services/load_sequencer.py

"""Loads an existing product and its images into the edit form."""

import asyncio
import logging
from dataclasses import dataclass, field

from listing_editor.config.settings import Settings
from listing_editor.models.image_ref import ImageRef
from listing_editor.models.product_form import ProductForm
from listing_editor.services.errors import FetchError
from listing_editor.storage.remote_store import DataStore

logger = logging.getLogger("listing_editor.load")


@dataclass
class LoadResult:
    """What the load managed to populate, and what went wrong."""

    product_id: str
    record_loaded: bool = False
    images_loaded: bool = False
    errors: list[FetchError] = field(
        default_factory=lambda: list[FetchError]()
    )

    @property
    def failed(self) -> bool:
        return bool(self.errors)


class LoadSequencer:
    """Fetches the product record, then its image rows.

    Both fetches always run, in that order.  Failures are logged and
    recorded on the :class:`LoadResult`; whatever did load stays in the
    form so the user can keep editing.  Nothing is retried.
    """

    def __init__(
        self,
        data_store: DataStore,
        settings: Settings | None = None,
    ) -> None:
        self.data_store = data_store
        self.settings = settings or Settings()

    async def load(
        self, product_id: str, form: ProductForm
    ) -> LoadResult:
        """Populate *form* from the stored product *product_id*."""
        result = LoadResult(product_id=product_id)

        # ── Step 1-2: product record ─────────────────────
        try:
            record = await asyncio.to_thread(
                self.data_store.get_by_id,
                self.settings.PRODUCTS_TABLE,
                product_id,
            )
            if record is None:
                raise FetchError("product", product_id, "not found")
            form.populate_from_record(record)
            result.record_loaded = True
            logger.info("Loaded product %s", product_id)
        except FetchError as exc:
            result.errors.append(exc)
            logger.error("Product fetch failed: %s", exc)
        except Exception as exc:
            error = FetchError("product", product_id, str(exc))
            result.errors.append(error)
            logger.error("Product fetch failed: %s", error, exc_info=exc)

        # ── Step 3-4: image rows ─────────────────────────
        try:
            rows = await asyncio.to_thread(
                self.data_store.list_where,
                self.settings.PRODUCT_IMAGES_TABLE,
                {"product_id": product_id},
                "image_url",
            )
            form.images.append(
                [ImageRef.persisted(row["image_url"]) for row in rows]
            )
            result.images_loaded = True
            logger.info(
                "Loaded %d image(s) for product %s", len(rows), product_id
            )
        except Exception as exc:
            error = FetchError("images", product_id, str(exc))
            result.errors.append(error)
            logger.error("Image fetch failed: %s", error, exc_info=exc)

        return result
