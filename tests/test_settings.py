# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from listing_editor.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants."""

    def test_table_and_bucket_names(self) -> None:
        """Remote names match the existing schema."""
        self.assertEqual(Settings.PRODUCTS_TABLE, "products")
        self.assertEqual(Settings.PRODUCT_IMAGES_TABLE, "product_images")
        self.assertEqual(Settings.STORAGE_BUCKET, "avatars")
        self.assertEqual(Settings.UPLOAD_FOLDER, "products")

    def test_carousel_page_size(self) -> None:
        self.assertEqual(Settings.CAROUSEL_PAGE_SIZE, 4)

    def test_categories_fixed_set(self) -> None:
        """Nine unique labels, including the catch-all last."""
        self.assertEqual(len(Settings.CATEGORIES), 9)
        self.assertEqual(
            len(set(Settings.CATEGORIES)), len(Settings.CATEGORIES)
        )
        self.assertIn("소설/시/희곡", Settings.CATEGORIES)
        self.assertEqual(Settings.CATEGORIES[-1], "기타")

    def test_allowed_image_types_are_images(self) -> None:
        for mime in Settings.ALLOWED_IMAGE_TYPES:
            with self.subTest(mime=mime):
                self.assertTrue(mime.startswith("image/"))

    def test_request_timeout_is_positive_int(self) -> None:
        self.assertIsInstance(Settings.REQUEST_TIMEOUT, int)
        self.assertGreater(Settings.REQUEST_TIMEOUT, 0)

    def test_load_failure_guard_off_by_default(self) -> None:
        """Pinned off by the shared fixture unless a test opts in."""
        self.assertFalse(Settings.BLOCK_SUBMIT_ON_LOAD_FAILURE)

    def test_path_constants_are_paths(self) -> None:
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)

    def test_impersonate_browser_is_string(self) -> None:
        self.assertIsInstance(Settings.IMPERSONATE_BROWSER, str)
        self.assertTrue(len(Settings.IMPERSONATE_BROWSER) > 0)


if __name__ == "__main__":
    unittest.main()
