#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
NewsFeed - Top Headlines Reader
Main Program Entry Point
"""

import sys
import os
import logging
import argparse
from typing import Any, Dict
from PySide6.QtWidgets import QApplication

# --- Project Setup ---
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(current_dir)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# --- Early Imports (Config, Services) ---
from newsfeed.config import init_config, AppConfig
from newsfeed.services.news_service import NewsService
from newsfeed.services.image_service import ImageService

# --- Configure Logging ---
log_file_path = "newsfeed.log"
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.FileHandler(log_file_path, encoding="utf-8"),
        logging.StreamHandler(sys.stdout),  # Log to console as well
    ],
)
logger = logging.getLogger(__name__)


def parse_args():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description="NewsFeed - top headlines reader")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level",
    )
    return parser.parse_args()


def setup_logging(level_name: str):
    """Sets the root logger level"""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.getLogger().setLevel(level)
    logger.info(f"Logging level set to {level_name.upper()}")


def initialize_services(config: AppConfig) -> Dict[str, Any]:
    """Initialize all application services"""
    logger.info("Initializing services...")
    try:
        news_service = NewsService.from_config(config)
        if news_service.build_endpoint() is None:
            logger.warning(
                f"Headlines endpoint '{config.base_url}' is not a valid http(s) URL; every refresh will fail."
            )
        image_service = ImageService(timeout=config.image_timeout)

        logger.info("Services initialized successfully.")
        return {
            "news_service": news_service,
            "image_service": image_service,
        }
    except Exception as e:
        logger.critical(f"Failed to initialize services: {e}", exc_info=True)
        sys.exit(f"Service Initialization Error: {e}")


def run_gui(app: QApplication, services: Dict[str, Any], config: AppConfig):
    """Runs the Qt GUI application"""
    logger.info("Starting GUI...")
    # Import GUI elements late to avoid issues if dependencies are missing initially
    try:
        from newsfeed.ui.views.main_window import MainWindow
    except ImportError as e:
        logger.critical(
            f"Failed to import GUI components (PySide6?): {e}", exc_info=True
        )
        sys.exit(f"GUI Import Error: {e}. Please ensure PySide6 is installed.")

    app.setApplicationName("NewsFeed")

    try:
        window = MainWindow(services, fetch_timeout=config.fetch_timeout)
        window.show()
        logger.info("MainWindow shown.")
        sys.exit(app.exec())
    except Exception as e:
        logger.critical(f"Error running the GUI application: {e}", exc_info=True)
        sys.exit(f"GUI Runtime Error: {e}")


# --- Main Execution ---
def main():
    """Application main entry point"""
    logger.info("-------------------- Application Starting --------------------")
    args = parse_args()
    setup_logging(args.log_level)

    try:
        # 1. Initialize Configuration
        config = init_config()

        # 2. Initialize QApplication
        app = QApplication(sys.argv)

        # 3. Initialize Services
        services = initialize_services(config)

        # --- Run the Application ---
        run_gui(app, services, config)

    except Exception as e:
        logger.critical(
            f"An unhandled error occurred during application startup: {e}",
            exc_info=True,
        )
        sys.exit(f"Fatal Error: {e}")
    finally:
        logger.info("-------------------- Application Terminating --------------------")


if __name__ == "__main__":
    main()
