# listing_editor/models/image_ref.py

"""Image references held by the editor and the ordered set over them."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from listing_editor.models.carousel import CarouselWindow
from listing_editor.storage.previews import PreviewRegistry

logger = logging.getLogger("listing_editor.images")


class ImageKind(str, Enum):
    """Whether an image already lives in the remote store."""

    PERSISTED = "persisted"
    PENDING = "pending"


@dataclass(frozen=True)
class ImageRef:
    """One entry of the edited image set.

    Persisted refs carry the stored public URL. Pending refs carry the
    local file contents plus the preview URL used to display them.
    """

    kind: ImageKind
    url: str
    filename: str = ""
    content_type: str = ""
    data: bytes = field(default=b"", repr=False)

    @classmethod
    def persisted(cls, url: str) -> "ImageRef":
        return cls(kind=ImageKind.PERSISTED, url=url)

    @classmethod
    def pending(
        cls,
        preview_url: str,
        filename: str,
        content_type: str,
        data: bytes,
    ) -> "ImageRef":
        return cls(
            kind=ImageKind.PENDING,
            url=preview_url,
            filename=filename,
            content_type=content_type,
            data=data,
        )

    @property
    def is_pending(self) -> bool:
        return self.kind is ImageKind.PENDING

    @property
    def label(self) -> str:
        """Short human-readable name for list and slot rendering."""
        if self.is_pending:
            return self.filename or self.url
        return self.url.rsplit("/", 1)[-1] or self.url


class ImageSet:
    """Ordered image references plus the carousel window over them."""

    def __init__(
        self,
        previews: PreviewRegistry | None = None,
        page_size: int = 4,
    ) -> None:
        self.previews = (
            previews if previews is not None else PreviewRegistry()
        )
        self.window = CarouselWindow(page_size=page_size)
        self._refs: list[ImageRef] = []

    # ── Mutation ─────────────────────────────────────────

    def append(self, new_refs: list[ImageRef]) -> None:
        """Add *new_refs* at the end; duplicates are kept."""
        self._refs.extend(new_refs)
        logger.debug(
            "Appended %d image(s), set size now %d",
            len(new_refs),
            len(self._refs),
        )

    def remove_at(self, index: int) -> ImageRef | None:
        """Remove the entry at *index*; out-of-range is a silent no-op."""
        if not 0 <= index < len(self._refs):
            return None
        removed = self._refs.pop(index)
        if removed.is_pending:
            self.previews.revoke(removed.url)
        self.window.clamp(len(self._refs))
        logger.debug(
            "Removed image %d (%s), offset now %d",
            index,
            removed.kind.value,
            self.window.offset,
        )
        return removed

    def clear(self) -> None:
        """Drop every entry and release all pending previews."""
        for ref in self._refs:
            if ref.is_pending:
                self.previews.revoke(ref.url)
        self._refs = []
        self.window.reset()

    # ── Carousel ─────────────────────────────────────────

    def advance(self) -> bool:
        return self.window.advance(len(self._refs))

    def retreat(self) -> bool:
        return self.window.retreat()

    def can_advance(self) -> bool:
        return self.window.show_advance(len(self._refs))

    def can_retreat(self) -> bool:
        return self.window.show_retreat(len(self._refs))

    def visible(self) -> list[ImageRef | None]:
        """Exactly one page of slots, padded with ``None`` at the tail."""
        page: list[ImageRef | None] = list(self.window.slice(self._refs))
        page.extend([None] * (self.window.page_size - len(page)))
        return page

    # ── Queries ──────────────────────────────────────────

    @property
    def offset(self) -> int:
        return self.window.offset

    @property
    def refs(self) -> list[ImageRef]:
        return list(self._refs)

    def pending_files(self) -> list[ImageRef]:
        """Pending refs in display order; each needs an upload."""
        return [r for r in self._refs if r.is_pending]

    def persisted_urls(self) -> list[str]:
        return [r.url for r in self._refs if not r.is_pending]

    def __len__(self) -> int:
        return len(self._refs)

    def __getitem__(self, index: int) -> ImageRef:
        return self._refs[index]
