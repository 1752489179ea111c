"""Entry point: ``python -m feedcleaner.main`` or the ``feed-cleaner`` script."""

import asyncio
import sys

from .domain.errors import CleanerDomainError
from .http_server import run_http_server
from .lifespan import lifespan_manager


async def main() -> None:
    async with lifespan_manager():
        await run_http_server()


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except (CleanerDomainError, ValueError, OSError) as e:
        # Bad settings, bad rule files or an unavailable port.
        print(f"feed-cleaner: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
