# listing_editor/services/errors.py

"""Error taxonomy for the load and submit sequences."""

REQUIRED_FIELDS_PROMPT = (
    "Please fill in the title, category, price, description, "
    "address and at least one photo."
)


class ListingEditorError(Exception):
    """Base class for editor-level failures."""


class ValidationError(ListingEditorError):
    """Required input is missing or malformed; no remote call was made."""

    def __init__(
        self,
        missing: list[str] | None = None,
        message: str = REQUIRED_FIELDS_PROMPT,
    ) -> None:
        super().__init__(message)
        self.missing: list[str] = list(missing or [])


class FetchError(ListingEditorError):
    """A load-time read (record or image rows) failed."""

    def __init__(self, what: str, product_id: str, reason: str) -> None:
        super().__init__(
            f"Failed to fetch {what} for product {product_id}: {reason}"
        )
        self.what = what
        self.product_id = product_id


class WriteError(ListingEditorError):
    """A submit step failed; later steps were not attempted."""

    def __init__(self, step: str, message: str) -> None:
        super().__init__(f"[{step}] {message}")
        self.step = step


class UploadCountMismatchError(WriteError):
    """Fewer uploads succeeded than there were pending files."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            "upload",
            f"Problem while uploading images: {actual} of "
            f"{expected} uploads succeeded",
        )
        self.expected = expected
        self.actual = actual
