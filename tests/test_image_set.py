# tests/test_image_set.py

"""Tests for ImageRef, ImageSet and preview ownership."""

import unittest

from listing_editor.models.image_ref import ImageKind, ImageRef, ImageSet
from listing_editor.storage.previews import PreviewRegistry


def _persisted(n: int) -> list[ImageRef]:
    """Build *n* persisted refs with distinct URLs."""
    return [
        ImageRef.persisted(f"https://cdn.example.com/p/{i}.png")
        for i in range(n)
    ]


def _pending(previews: PreviewRegistry, name: str) -> ImageRef:
    """Build a pending ref whose preview lives in *previews*."""
    data = name.encode()
    return ImageRef.pending(
        preview_url=previews.create(data),
        filename=name,
        content_type="image/png",
        data=data,
    )


class TestImageRef(unittest.TestCase):
    """Discriminated persisted / pending references."""

    def test_persisted_ref(self) -> None:
        """Persisted refs carry only their stored URL."""
        ref = ImageRef.persisted("https://cdn.example.com/a/b.png")
        self.assertIs(ref.kind, ImageKind.PERSISTED)
        self.assertFalse(ref.is_pending)
        self.assertEqual(ref.label, "b.png")
        self.assertEqual(ref.data, b"")

    def test_pending_ref(self) -> None:
        """Pending refs keep their bytes and preview URL."""
        ref = ImageRef.pending("preview://x", "cat.png", "image/png", b"\x89")
        self.assertTrue(ref.is_pending)
        self.assertEqual(ref.label, "cat.png")
        self.assertEqual(ref.data, b"\x89")


class TestImageSet(unittest.TestCase):
    """Append, remove and carousel behaviour of the image set."""

    def setUp(self) -> None:
        self.previews = PreviewRegistry()
        self.images = ImageSet(self.previews)

    def test_append_preserves_order_and_duplicates(self) -> None:
        """New refs go to the end; identical refs are both kept."""
        first = _persisted(2)
        self.images.append(first)
        self.images.append([first[0]])
        self.assertEqual(
            [r.url for r in self.images.refs],
            [first[0].url, first[1].url, first[0].url],
        )

    def test_remove_out_of_bounds_is_noop(self) -> None:
        """Bad indexes change nothing and return None."""
        self.images.append(_persisted(3))
        self.assertIsNone(self.images.remove_at(3))
        self.assertIsNone(self.images.remove_at(-1))
        self.assertEqual(len(self.images), 3)

    def test_remove_shifts_left(self) -> None:
        """Removing index 1 moves later entries down."""
        refs = _persisted(3)
        self.images.append(refs)
        removed = self.images.remove_at(1)
        self.assertEqual(removed, refs[1])
        self.assertEqual(self.images.refs, [refs[0], refs[2]])

    def test_remove_pending_revokes_preview(self) -> None:
        """A removed pending image releases its preview blob."""
        ref = _pending(self.previews, "a.png")
        self.images.append([ref])
        self.assertIn(ref.url, self.previews)
        self.images.remove_at(0)
        self.assertNotIn(ref.url, self.previews)
        self.assertEqual(len(self.previews), 0)

    def test_pending_files_match_pending_refs(self) -> None:
        """Each pending entry contributes exactly one file to upload."""
        a = _pending(self.previews, "a.png")
        b = _pending(self.previews, "b.png")
        self.images.append([_persisted(1)[0], a, b])
        self.images.remove_at(1)
        self.assertEqual(self.images.pending_files(), [b])
        self.assertEqual(
            self.images.persisted_urls(),
            ["https://cdn.example.com/p/0.png"],
        )

    def test_clear_releases_everything(self) -> None:
        """clear() empties the set, resets the window and revokes previews."""
        self.images.append(_persisted(5))
        self.images.append([_pending(self.previews, "x.png")])
        self.images.advance()
        self.images.clear()
        self.assertEqual(len(self.images), 0)
        self.assertEqual(self.images.offset, 0)
        self.assertEqual(len(self.previews), 0)

    def test_visible_pads_with_none(self) -> None:
        """A short set renders as filled slots plus empty ones."""
        refs = _persisted(2)
        self.images.append(refs)
        self.assertEqual(self.images.visible(), [refs[0], refs[1], None, None])

    def test_six_images_advance_then_remove(self) -> None:
        """Advance twice over 6, remove index 0: offset clamps to 1."""
        refs = _persisted(6)
        self.images.append(refs)
        self.images.advance()
        self.images.advance()
        self.assertEqual(self.images.offset, 2)
        self.assertEqual(self.images.visible(), refs[2:6])

        self.images.remove_at(0)
        self.assertEqual(len(self.images), 5)
        self.assertEqual(self.images.offset, 1)
        self.assertEqual(self.images.visible(), refs[2:6])

    def test_remove_never_leaves_window_past_end(self) -> None:
        """Repeated removals keep every slot inside the set."""
        self.images.append(_persisted(9))
        for _ in range(5):
            self.images.advance()
        while len(self.images):
            self.images.remove_at(len(self.images) - 1)
            n = len(self.images)
            self.assertLessEqual(self.images.offset, max(n - 4, 0))
            filled = [r for r in self.images.visible() if r is not None]
            self.assertEqual(len(filled), min(4, n))

    def test_navigation_flags(self) -> None:
        """can_retreat/can_advance mirror the window rules."""
        self.images.append(_persisted(4))
        self.assertFalse(self.images.can_retreat())
        self.assertFalse(self.images.can_advance())
        self.images.append(_persisted(1))
        self.assertTrue(self.images.can_advance())


class TestPreviewRegistry(unittest.TestCase):
    """Lifecycle of preview URLs."""

    def test_create_resolve_revoke(self) -> None:
        """A preview resolves until revoked; revoke is idempotent."""
        previews = PreviewRegistry()
        url = previews.create(b"abc")
        self.assertTrue(url.startswith("preview://"))
        self.assertEqual(previews.resolve(url), b"abc")
        previews.revoke(url)
        previews.revoke(url)
        self.assertIsNone(previews.resolve(url))
        self.assertEqual(len(previews), 0)

    def test_urls_are_unique(self) -> None:
        """Identical blobs still get distinct previews."""
        previews = PreviewRegistry()
        self.assertNotEqual(previews.create(b"x"), previews.create(b"x"))
        self.assertEqual(len(previews), 2)


if __name__ == "__main__":
    unittest.main()
