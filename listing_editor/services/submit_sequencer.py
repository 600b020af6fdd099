# listing_editor/services/submit_sequencer.py

"""Validates the edit form and writes it back to the remote stores.

The write runs as four dependent steps with no enclosing transaction:

1. update the product record,
2. upload every pending image (concurrently, joined as one unit),
3. delete all existing image rows for the product,
4. insert one image row per image currently in the form.

A failing step stops the sequence.  Steps that already ran are not
rolled back: a failed upload leaves the record updated, a failed
delete or insert leaves uploaded blobs without rows.  These windows
are accepted; the user resubmits from the untouched form.
"""

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any

from listing_editor.config.settings import Settings
from listing_editor.models.image_ref import ImageRef
from listing_editor.models.product_form import ProductForm
from listing_editor.services.errors import (
    UploadCountMismatchError,
    ValidationError,
    WriteError,
)
from listing_editor.services.load_sequencer import LoadResult
from listing_editor.storage.remote_store import (
    DataStore,
    ObjectStore,
    RemoteStoreError,
)

logger = logging.getLogger("listing_editor.submit")


@dataclass
class SubmitOutcome:
    """Result of one submit attempt."""

    product_id: str
    ok: bool = False
    failed_step: str | None = None
    error: str = ""
    uploaded_urls: list[str] = field(
        default_factory=lambda: list[str]()
    )
    inserted_rows: list[dict[str, Any]] = field(
        default_factory=lambda: list[dict[str, Any]]()
    )


class SubmitSequencer:
    """Runs update -> upload -> delete -> insert for one product."""

    def __init__(
        self,
        data_store: DataStore,
        object_store: ObjectStore,
        settings: Settings | None = None,
    ) -> None:
        self.data_store = data_store
        self.object_store = object_store
        self.settings = settings or Settings()

    # ── Validation ───────────────────────────────────────

    def validate(
        self,
        form: ProductForm,
        load_result: LoadResult | None = None,
    ) -> dict[str, Any]:
        """Check required inputs and return the record update fields.

        Raises:
            ValidationError: a required input is empty, the price does
                not parse, or (when configured) the load had failed.
        """
        missing = form.missing_fields()
        if missing:
            raise ValidationError(missing)
        if (
            self.settings.BLOCK_SUBMIT_ON_LOAD_FAILURE
            and load_result is not None
            and load_result.failed
        ):
            raise ValidationError(
                message=(
                    "The product did not load completely; "
                    "reopen it before saving."
                )
            )
        return form.to_update_fields()

    # ── Public API ───────────────────────────────────────

    async def submit(
        self,
        product_id: str,
        form: ProductForm,
        load_result: LoadResult | None = None,
    ) -> SubmitOutcome:
        """Validate *form* and persist it.

        Validation and remote failures are reported on the returned
        outcome rather than raised.  On success the form is reset to
        its empty state; on any failure it is left exactly as it was.
        """
        outcome = SubmitOutcome(product_id=product_id)
        logger.debug("Submit requested: %s", form.snapshot())

        try:
            fields = self.validate(form, load_result)
        except ValidationError as exc:
            outcome.failed_step = "validate"
            outcome.error = str(exc)
            logger.warning(
                "Submit rejected for %s, missing %s",
                product_id,
                exc.missing,
            )
            return outcome

        # The form may keep changing while we are suspended
        refs = form.images.refs

        try:
            await self._update_record(product_id, fields)
            outcome.uploaded_urls = await self._upload_pending(
                [r for r in refs if r.is_pending]
            )
            await self._delete_image_rows(product_id)
            rows = self._build_image_rows(
                product_id, refs, outcome.uploaded_urls
            )
            await self._insert_image_rows(rows)
            outcome.inserted_rows = rows
        except WriteError as exc:
            outcome.failed_step = exc.step
            outcome.error = str(exc)
            logger.error(
                "Submit for %s aborted at '%s': %s",
                product_id,
                exc.step,
                exc,
                exc_info=exc,
            )
            if exc.step in ("delete", "insert") and outcome.uploaded_urls:
                logger.warning(
                    "%d uploaded blob(s) have no image row: %s",
                    len(outcome.uploaded_urls),
                    outcome.uploaded_urls,
                )
            return outcome

        form.reset()
        outcome.ok = True
        logger.info(
            "Product %s saved with %d image(s)", product_id, len(rows)
        )
        return outcome

    def new_upload_path(self) -> str:
        """Unique object path: ``<folder>/<uuid>_<epoch ms>``."""
        stamp = int(time.time() * 1000)
        return f"{self.settings.UPLOAD_FOLDER}/{uuid.uuid4()}_{stamp}"

    # ── Steps ────────────────────────────────────────────

    async def _update_record(
        self, product_id: str, fields: dict[str, Any]
    ) -> None:
        try:
            await asyncio.to_thread(
                self.data_store.update,
                self.settings.PRODUCTS_TABLE,
                product_id,
                fields,
            )
        except Exception as exc:
            raise WriteError("update", str(exc)) from exc
        logger.info("Product record %s updated", product_id)

    async def _upload_one(self, ref: ImageRef) -> str:
        bucket = self.settings.STORAGE_BUCKET
        path = self.new_upload_path()
        await asyncio.to_thread(
            self.object_store.upload,
            bucket,
            path,
            ref.data,
            ref.content_type or "application/octet-stream",
        )
        url = self.object_store.get_public_url(bucket, path)
        if not url:
            raise RemoteStoreError(f"No public URL for {bucket}/{path}")
        return url

    async def _upload_pending(self, pending: list[ImageRef]) -> list[str]:
        """Upload all *pending* images; URLs come back in input order."""
        results = await asyncio.gather(
            *(self._upload_one(ref) for ref in pending),
            return_exceptions=True,
        )

        urls: list[str] = []
        for ref, result in zip(pending, results):
            if isinstance(result, str):
                urls.append(result)
            elif isinstance(result, BaseException):
                logger.error(
                    "Upload of '%s' failed: %s",
                    ref.label,
                    result,
                    exc_info=result,
                )

        if len(urls) != len(pending):
            raise UploadCountMismatchError(len(pending), len(urls))
        logger.info("Uploaded %d new image(s)", len(urls))
        return urls

    async def _delete_image_rows(self, product_id: str) -> None:
        try:
            await asyncio.to_thread(
                self.data_store.delete,
                self.settings.PRODUCT_IMAGES_TABLE,
                {"product_id": product_id},
            )
        except Exception as exc:
            raise WriteError("delete", str(exc)) from exc
        logger.info("Old image rows for %s deleted", product_id)

    def _build_image_rows(
        self,
        product_id: str,
        refs: list[ImageRef],
        uploaded_urls: list[str],
    ) -> list[dict[str, Any]]:
        """One row per image in display order.

        Persisted images keep their stored URL; pending images take
        the freshly uploaded URLs in the order they were uploaded.
        """
        fresh = iter(uploaded_urls)
        return [
            {
                "product_id": product_id,
                "image_url": next(fresh) if ref.is_pending else ref.url,
            }
            for ref in refs
        ]

    async def _insert_image_rows(self, rows: list[dict[str, Any]]) -> None:
        try:
            await asyncio.to_thread(
                self.data_store.insert,
                self.settings.PRODUCT_IMAGES_TABLE,
                rows,
            )
        except Exception as exc:
            raise WriteError("insert", str(exc)) from exc
        logger.info("Inserted %d image row(s)", len(rows))
