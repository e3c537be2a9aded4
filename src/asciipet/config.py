"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths and font metrics from being
   scattered throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (the default pet image) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_IMAGE_PATH (str): Image shown when no preference is stored.
    SAVED_IMAGE_PATH (str): Where a dropped image is cached for the next start.
    PREFERENCES_PATH (str): The JSON preferences file.
"""
import sys
import os
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/asciipet/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Paths
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_IMAGE_PATH: str = os.path.join(ASSETS_PATH, "idle.png")
SAVED_IMAGE_PATH: str = os.path.join(ASSETS_PATH, "saved_pet.png")
PREFERENCES_PATH: str = "config.json"

# Glyph cell metrics of the 7x13 bitmap-style font
GLYPH_CELL_WIDTH_PX: int = 7
GLYPH_CELL_HEIGHT_PX: int = 13
TOP_PADDING_PX: int = 20
BASE_Y_PX: int = 30

# Pet width in glyphs
TARGET_WIDTH_GLYPHS: int = 50

# Scheduler advice (ticks per second)
ACTIVE_TPS: int = 60
IDLE_TPS: int = 5

# Background sampler period (seconds)
MONITOR_INTERVAL_S: float = 2.0
