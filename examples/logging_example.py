#!/usr/bin/env python3
"""
Logging example for the Teams target.

Attaches an MsTeamsHandler to a logger and emits one record per level;
records at ERROR and above are posted to the configured webhook.
"""

import logging
from pathlib import Path
import sys

# Add the parent directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from msteams_target import MsTeamsHandler, MsTeamsTarget, load_target_config, load_variable_table


CONFIG_PATH = Path(__file__).parent / "msteams.yaml"


def do_actions(logger: logging.Logger) -> None:
    logger.debug("Debugging is so nice ... NOT")
    logger.info("Important Information")
    logger.warning("oO ... something is wrong, but I'm not sure")
    logger.error("oO ... something is wrong, definitely", extra={"order_id": 4711})
    logger.critical("oO ... something is wrong, we're all doomed")


def main():
    logging.basicConfig(level=logging.DEBUG)

    target = MsTeamsTarget(
        load_target_config(CONFIG_PATH),
        variables=load_variable_table(CONFIG_PATH),
    )
    handler = MsTeamsHandler(target, level=logging.ERROR)

    logger = logging.getLogger("example.runner")
    logger.addHandler(handler)
    try:
        do_actions(logger)
    finally:
        logger.removeHandler(handler)
        handler.close()


if __name__ == "__main__":
    main()
