"""Protean Engine runner for the marketplace domains.

Starts Engine workers that process events asynchronously in production:
- OutboxProcessor: polls the outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes projectors and event handlers

The ordering engine is what carries Onboarding account events into the
ordering read models when PROTEAN_ENV=production.

Usage:
    python src/server.py                     # Run both domain engines
    python src/server.py --domain onboarding # Run only the onboarding engine
    python src/server.py --domain ordering   # Run only the ordering engine
"""

import argparse
import asyncio

from protean.server.engine import Engine

DOMAIN_NAMES = ["onboarding", "ordering"]


def _get_domain(name):
    """Import and initialize a domain by name."""
    if name == "onboarding":
        from onboarding.domain import onboarding

        onboarding.init()
        return onboarding
    elif name == "ordering":
        from ordering.domain import ordering

        ordering.init()
        return ordering
    else:
        raise ValueError(f"Unknown domain: {name}")


async def run(domain_names):
    engines = [Engine(_get_domain(name)) for name in domain_names]
    await asyncio.gather(*(engine.run() for engine in engines))


def main():
    parser = argparse.ArgumentParser(description="Marketplace Engine runner")
    parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        help="Run a single domain engine (default: run all)",
    )
    args = parser.parse_args()

    domain_names = [args.domain] if args.domain else DOMAIN_NAMES

    asyncio.run(run(domain_names))


if __name__ == "__main__":
    main()
