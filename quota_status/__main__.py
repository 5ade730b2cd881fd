import argparse
import asyncio
import logging
import sys

from .models import QueryResult
from .providers import PROVIDERS, BaseProvider


async def query_all(providers: list[BaseProvider]) -> list[QueryResult]:
    """Query providers concurrently; each result is independent."""
    return list(await asyncio.gather(*(provider.query() for provider in providers)))


def render_results(providers: list[BaseProvider], results: list[QueryResult]) -> str:
    lines = []
    for provider, result in zip(providers, results):
        lines.append(f"\n{'=' * 60}")
        lines.append(f"## {provider.display_name}")
        lines.append("")
        lines.append(result.output if result.success else f"✗ {result.error}")
    lines.append(f"\n{'=' * 60}")
    return "\n".join(lines)


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Show remaining quota for AI coding plan accounts."
    )
    parser.add_argument(
        "--provider",
        action="append",
        choices=sorted(PROVIDERS),
        help="Provider to query (repeatable, default: all)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log requests and credential lookups to stderr",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    names = args.provider or list(PROVIDERS)
    providers = [PROVIDERS[name]() for name in names]
    results = await query_all(providers)

    print(render_results(providers, results))

    if not any(result.success for result in results):
        return 1
    return 0


def cli() -> None:
    """Synchronous entry point for CLI."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
