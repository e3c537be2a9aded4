"""
Input/Output Manager (JSON)
Handles saving and loading the EffectConfig preferences and caching
dropped images.
"""
import json
import logging
import os
from typing import Optional

from asciipet.model.entity import EffectConfig

# Get module logger
logger = logging.getLogger(__name__)


class PreferencesIO:

    @staticmethod
    def load(filepath: str) -> EffectConfig:
        """
        Reads the preferences file. A missing or unreadable file is not an
        error: the defaults are returned instead.
        """
        if not os.path.exists(filepath):
            logger.info(f"No preferences at '{filepath}', using defaults.")
            return EffectConfig()

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read preferences '{filepath}', using defaults: {e}")
            return EffectConfig()

        if not isinstance(data, dict):
            logger.warning(f"Preferences '{filepath}' are not a JSON object, using defaults.")
            return EffectConfig()

        config = EffectConfig.from_dict(data)
        logger.info(f"Preferences loaded from: {filepath}")
        return config

    @staticmethod
    def save(config: EffectConfig, filepath: str) -> None:
        logger.info(f"Saving preferences to: {filepath}")
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2)
                f.write("\n")
        except OSError as e:
            logger.exception(f"Failed to save preferences: {e}")
            raise e

    @staticmethod
    def resolve_image_path(config: EffectConfig, fallback: str) -> str:
        """The configured image if it still exists, otherwise `fallback`."""
        if config.image_path and os.path.exists(config.image_path):
            return config.image_path
        if config.image_path:
            logger.warning(f"Configured image '{config.image_path}' not found, falling back to '{fallback}'.")
        return fallback

    @staticmethod
    def cache_image(data: bytes, dest_path: str) -> Optional[str]:
        """
        Writes the raw bytes of a dropped image so it is reused on the next
        start. Returns the path on success, None if the write failed.
        """
        try:
            parent = os.path.dirname(dest_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(dest_path, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.warning(f"Could not cache image to '{dest_path}': {e}")
            return None

        logger.info(f"Image cached to: {dest_path}")
        return dest_path
