"""
Application Initialization
==========================
This module wires the model, the controllers and the window together and
starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Loads the preferences (EffectConfig).
2. Starts the background system monitor.
3. Instantiates the FrameController and loads the pet image.
4. Instantiates the PetWindow, passing the controller and monitor in.
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from asciipet.app.application import create_app
from asciipet.config import DEFAULT_IMAGE_PATH, PREFERENCES_PATH
from asciipet.controller.frame import FrameController
from asciipet.controller.monitor import MonitorWorker, SnapshotCache
from asciipet.logging_config import route_qt_messages, setup_logging
from asciipet.model.entity import RasterImage
from asciipet.model.io import PreferencesIO
from asciipet.view.pet_window import PetWindow

logger = logging.getLogger(__name__)

PLACEHOLDER_COLOR = (128, 128, 128)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="asciipet", description="A glyph-art desktop pet.")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    parser.add_argument("--config", default=PREFERENCES_PATH, help="preferences JSON file")
    parser.add_argument("--image", default=None, help="image to show instead of the saved one")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)
    route_qt_messages()

    # 2. Create the Qt Application
    app = create_app()

    # 3. Preferences and pet image
    config = PreferencesIO.load(args.config)
    image_path = args.image or PreferencesIO.resolve_image_path(config, DEFAULT_IMAGE_PATH)

    # 4. Background monitor
    cache = SnapshotCache()
    monitor = MonitorWorker(cache)
    monitor.start()

    # 5. Frame pipeline
    controller = FrameController(config=config, snapshot_provider=cache)
    if controller.load_image_file(image_path) is None:
        logger.error(f"No pet image could be loaded from '{image_path}'. Drop an image onto the window.")
        controller.load_image(RasterImage.solid(100, 100, PLACEHOLDER_COLOR))

    # 6. Window
    window = PetWindow(controller, preferences_path=args.config, monitor=monitor)
    window.show()

    # 7. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
