"""Write the auction validator blueprint to disk.

Environment Variables:
    BLUEPRINT_PATH: Output file (default: plutus.json)

Usage:
    python -m scripts.write_blueprint

    BLUEPRINT_PATH=build/plutus.json python -m scripts.write_blueprint
"""

import json
import logging
import os
from pathlib import Path

from auction_validator.core.config import settings
from auction_validator.schemas.blueprint import build_blueprint

BLUEPRINT_PATH = Path(os.getenv("BLUEPRINT_PATH", "plutus.json"))

logger = logging.getLogger(__name__)


def write_blueprint(path: Path = BLUEPRINT_PATH) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(build_blueprint(settings), indent=2) + "\n", encoding="utf-8")
    return path


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)
    written = write_blueprint()
    logger.info(f"Blueprint written to {written}")


if __name__ == "__main__":
    main()
