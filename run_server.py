#!/usr/bin/env python3
"""
Development launcher for Trustless Agent Pay.

Host, port and reload come from the same Settings the application uses, so
.env is the single source of configuration.
"""

import uvicorn

from trustless_agent.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "trustless_agent.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
