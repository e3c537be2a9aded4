"""Tests for preference persistence."""

import json
import os
import tempfile
import unittest

from asciipet.model.entity import EffectConfig
from asciipet.model.io import PreferencesIO


class TestPreferencesIO(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        self.path = os.path.join(self.tmp, "config.json")

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, text):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)

    def test_missing_file_gives_defaults(self):
        config = PreferencesIO.load(self.path)
        self.assertEqual(config, EffectConfig())
        self.assertTrue(config.show_color)
        self.assertTrue(config.show_glitch)
        self.assertTrue(config.show_animation)
        self.assertFalse(config.show_monitor)

    def test_corrupt_json_gives_defaults(self):
        self.write("{not json")
        self.assertEqual(PreferencesIO.load(self.path), EffectConfig())

    def test_non_object_gives_defaults(self):
        self.write("[1, 2, 3]")
        self.assertEqual(PreferencesIO.load(self.path), EffectConfig())

    def test_save_then_load(self):
        config = EffectConfig(image_path="assets/saved_pet.png", show_color=False, show_monitor=True)
        PreferencesIO.save(config, self.path)
        self.assertEqual(PreferencesIO.load(self.path), config)

    def test_file_layout(self):
        PreferencesIO.save(EffectConfig(), self.path)
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(
            set(data),
            {"image_path", "show_color", "show_glitch", "show_animation", "show_monitor"},
        )

    def test_partial_and_unknown_keys(self):
        self.write(json.dumps({"show_glitch": False, "volume": 11}))
        config = PreferencesIO.load(self.path)
        self.assertFalse(config.show_glitch)
        self.assertTrue(config.show_color)
        self.assertFalse(hasattr(config, "volume"))

    def test_wrong_types_fall_back_to_defaults(self):
        self.write(json.dumps({
            "show_monitor": "false",
            "show_color": 0,
            "show_glitch": False,
            "image_path": 42,
        }))
        config = PreferencesIO.load(self.path)
        self.assertFalse(config.show_monitor)
        self.assertTrue(config.show_color)
        self.assertFalse(config.show_glitch)
        self.assertEqual(config.image_path, EffectConfig().image_path)

    def test_save_to_missing_directory_raises(self):
        with self.assertRaises(OSError):
            PreferencesIO.save(EffectConfig(), os.path.join(self.tmp, "nope", "config.json"))

    def test_resolve_image_path(self):
        image = os.path.join(self.tmp, "pet.png")
        with open(image, "wb") as f:
            f.write(b"\x89PNG")
        self.assertEqual(PreferencesIO.resolve_image_path(EffectConfig(image_path=image), "default.png"), image)
        missing = EffectConfig(image_path=os.path.join(self.tmp, "gone.png"))
        self.assertEqual(PreferencesIO.resolve_image_path(missing, "default.png"), "default.png")
        self.assertEqual(PreferencesIO.resolve_image_path(EffectConfig(image_path=""), "default.png"), "default.png")

    def test_cache_image(self):
        dest = os.path.join(self.tmp, "assets", "saved_pet.png")
        self.assertEqual(PreferencesIO.cache_image(b"abc", dest), dest)
        with open(dest, "rb") as f:
            self.assertEqual(f.read(), b"abc")


if __name__ == '__main__':
    unittest.main()
