# listing_editor/storage/previews.py

"""Transient preview URLs over in-memory image blobs."""

import logging
import uuid

logger = logging.getLogger("listing_editor.previews")

PREVIEW_SCHEME = "preview://"


class PreviewRegistry:
    """Owns the blobs behind ``preview://`` URLs until they are revoked.

    A preview lives exactly as long as the pending image that displays
    it; the image set revokes it on removal and on reset.
    """

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    def create(self, data: bytes) -> str:
        """Register *data* and return a fresh preview URL for it."""
        url = f"{PREVIEW_SCHEME}{uuid.uuid4()}"
        self._blobs[url] = data
        logger.debug("Preview created: %s (%d bytes)", url, len(data))
        return url

    def resolve(self, url: str) -> bytes | None:
        """Return the blob for *url*, or ``None`` once revoked."""
        return self._blobs.get(url)

    def revoke(self, url: str) -> None:
        """Release the blob behind *url*. Unknown URLs are ignored."""
        if self._blobs.pop(url, None) is not None:
            logger.debug("Preview revoked: %s", url)

    def __contains__(self, url: object) -> bool:
        return url in self._blobs

    def __len__(self) -> int:
        return len(self._blobs)
