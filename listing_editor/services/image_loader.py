# listing_editor/services/image_loader.py

"""Read local image files into pending image references."""

import asyncio
import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path

from listing_editor.config.settings import Settings
from listing_editor.models.image_ref import ImageRef
from listing_editor.storage.previews import PreviewRegistry

logger = logging.getLogger("listing_editor.image_loader")


@dataclass
class IntakeResult:
    """Files accepted as pending images and paths that were skipped."""

    accepted: list[ImageRef] = field(
        default_factory=lambda: list[ImageRef]()
    )
    skipped: list[str] = field(
        default_factory=lambda: list[str]()
    )


def split_paths(raw: str) -> list[str]:
    """Split a comma-separated path list typed by the user."""
    return [p.strip() for p in raw.split(",") if p.strip()]


async def read_image_files(
    paths: list[str],
    previews: PreviewRegistry,
) -> IntakeResult:
    """Read *paths* concurrently and wrap each image as a pending ref.

    Order of ``accepted`` follows the order of *paths*.  Non-image and
    unreadable files are logged and listed in ``skipped``.
    """
    allowed = set(Settings.ALLOWED_IMAGE_TYPES)

    async def read_one(path: Path) -> bytes:
        return await asyncio.to_thread(path.read_bytes)

    candidates: list[tuple[str, Path, str]] = []
    result = IntakeResult()
    for raw in paths:
        path = Path(raw).expanduser()
        content_type, _ = mimetypes.guess_type(path.name)
        if content_type is None or content_type not in allowed:
            logger.warning(
                "Skipping '%s': unsupported type %s", raw, content_type
            )
            result.skipped.append(raw)
            continue
        candidates.append((raw, path, content_type))

    blobs = await asyncio.gather(
        *(read_one(p) for _, p, _ in candidates), return_exceptions=True
    )

    for (raw, path, content_type), blob in zip(candidates, blobs):
        if isinstance(blob, BaseException):
            logger.warning(
                "Skipping '%s': %s", raw, blob, exc_info=blob
            )
            result.skipped.append(raw)
            continue
        result.accepted.append(
            ImageRef.pending(
                preview_url=previews.create(blob),
                filename=path.name,
                content_type=content_type,
                data=blob,
            )
        )

    logger.info(
        "Read %d image(s), skipped %d",
        len(result.accepted),
        len(result.skipped),
    )
    return result
