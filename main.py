#!/usr/bin/env python3
"""
pagekit - paged list browser entry point
"""
import logging
import os
import sys

# Add the project directory to sys.path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from simple_logger import Slogger
from pagekit.config import CONFIG_FILE, load_config
from pagekit.ui.app import PagedListApp


def setup_logging(config) -> None:
    """Send both Slogger and stdlib logging to the configured file."""
    log_cfg = config["logging"]
    Slogger.configure(path=log_cfg["path"], level=log_cfg["level"])

    log_dir = os.path.dirname(log_cfg["path"])
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(
        level=getattr(logging, log_cfg["level"], logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=[logging.FileHandler(log_cfg["path"], mode="a", encoding="utf-8")],
    )


def main():
    config = load_config(CONFIG_FILE)
    setup_logging(config)

    Slogger.info("Starting pagekit browser...", {"list": config["ui"]["list_key"]})

    app = PagedListApp(config, config_file=CONFIG_FILE)
    app.run()

if __name__ == "__main__":
    main()
