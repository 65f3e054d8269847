"""Console entry point that serves the API with uvicorn."""

from __future__ import annotations

import uvicorn

from .config import settings


def main() -> None:
    # Single worker: the JSON report store has no cross-process locking.
    uvicorn.run(
        "safai.main:app",
        host=settings.host,
        port=settings.port,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
