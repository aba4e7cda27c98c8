"""Run one stake reindex pass into a new accounts index generation.

Usage:
    PYTHONPATH=src python scripts/run_reindex.py

Configuration comes from the environment / .env (see stakesync.config.Settings).
Exits non-zero when any phase fails; the new generation is then left unpromoted.
"""

import asyncio
import logging
import sys


async def main() -> int:
    from stakesync.container import Container
    from stakesync.exceptions import PipelineError

    container = Container()
    settings = container.settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)-5s %(name)s - %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    if not settings.delegation_legacy_contract_address:
        print("DELEGATION_LEGACY_CONTRACT_ADDRESS is not set", file=sys.stderr)
        return 2

    http_client = container.http_client()
    try:
        report = await container.pipeline().run()
    except PipelineError as e:
        print(f"Reindex failed in phase {e.phase}: {e}", file=sys.stderr)
        return 1
    finally:
        await http_client.close()

    print(f"New generation: {report.target_index}  (source {report.source_index})")
    print(
        f"  accounts: {report.accounts_computed} computed, {report.accounts_existing} existing,"
        f" {report.accounts_indexed} indexed, {report.failed_items} failed"
    )
    for timing in report.timings:
        print(f"  {timing.phase.value:<15} {timing.seconds:.1f}s")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
