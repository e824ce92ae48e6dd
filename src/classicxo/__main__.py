"""Entry point for running ClassicXO via ``python -m classicxo``."""

from __future__ import annotations

import logging
import os

import uvicorn

from . import ui


def main() -> None:
    """Start the FastAPI-powered ClassicXO web server."""

    logging.basicConfig(
        level=os.environ.get("CLASSICXO_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.environ.get("CLASSICXO_HOST", "0.0.0.0")
    port = int(os.environ.get("CLASSICXO_PORT", "8000"))
    ui.AI_THINK_DELAY = float(os.environ.get("CLASSICXO_AI_DELAY", ui.AI_THINK_DELAY))
    uvicorn.run(ui.app, host=host, port=port, reload=False, log_config=None)


if __name__ == "__main__":
    main()
