from __future__ import annotations

import logging
import os
import sys

from personnel_registry import create_app
from personnel_registry.core.exceptions import StoreUnavailableError

logger = logging.getLogger("personnel_registry")


def main() -> None:
    try:
        app = create_app()
    except StoreUnavailableError as e:
        logger.critical("Failed to connect to database: %s", e)
        sys.exit(1)

    port = int(os.getenv("PORT", "5000"))
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=port, debug=app.config["DEBUG"])


if __name__ == "__main__":
    main()
