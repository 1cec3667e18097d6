"""devauth entrypoint.

Run with:
  python -m devauth
"""

import logging
import os

import uvicorn


def main() -> None:
    logging.basicConfig(
        level=os.getenv("DEVAUTH_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.getenv("DEVAUTH_HOST", "0.0.0.0")
    port = int(os.getenv("DEVAUTH_PORT", "8000"))
    reload = os.getenv("DEVAUTH_RELOAD", "false").lower() in {"1", "true", "yes", "y"}
    uvicorn.run("devauth.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
