"""IdeaCheck - Startup Idea Competitive Analysis

Simple CLI for analysing ideas and managing the agent result cache.
"""

import argparse
import asyncio
import json
import sys

from app.api.deps import build_services
from app.config import settings
from app.llm_client import LLMConfigError
from app.services import logger as log_service  # noqa: F401  configures sinks
from app.services.advisors import AdvisorGenerationError
from app.services.canned_analysis import analyze_idea
from app.tools.agi_client import AGIError


def print_analysis(data: dict) -> None:
    analysis = data["analysis"]
    print(f"\n[*] Opportunity score: {analysis['opportunityScore']}/10")
    print(f"   Competitors: {analysis['totalCompetitors']}")
    if analysis.get("category"):
        print(f"   Category: {analysis['category']}")
    for competitor in analysis["topCompetitors"]:
        print(f"  - {competitor['name']}: {competitor['url']}")

    print(f"\n{'='*50}")
    print("OPTIMIST:")
    print(f"{'='*50}")
    print(data["optimist"]["text"])
    print(f"\n{'='*50}")
    print("REALIST:")
    print(f"{'='*50}")
    print(data["realist"]["text"])

    if data.get("pivot"):
        print(f"\n[!] {data['pivot']}")


async def run_live(idea: str) -> dict:
    """Run the live search and advisor pipeline on one idea."""
    from app.services.pipeline import run_live_analysis

    services = build_services(settings)
    try:
        llm = services.llm_client()
        return await run_live_analysis(
            idea, services.search, services.advisor_generator(llm), llm=llm
        )
    finally:
        await services.pool.cleanup()


async def run_search(search_type: str, query: str) -> list[dict]:
    services = build_services(settings)
    search = services.search
    try:
        if search_type == "producthunt":
            results = await search.search_product_hunt(query)
        elif search_type == "google":
            results = await search.search_google(query)
        else:
            results = await search.search_cost_effective(query)
    finally:
        await services.pool.cleanup()
    return [record.to_dict() for record in results]


def main():
    parser = argparse.ArgumentParser(description="IdeaCheck competitive analysis")
    parser.add_argument("--idea", "-i", help="Startup idea to analyse")
    parser.add_argument("--live", action="store_true", help="Use the live agent and model APIs")
    parser.add_argument(
        "--search",
        choices=["producthunt", "google", "cost_effective"],
        help="Run a single search for --idea and print the raw results",
    )
    parser.add_argument("--cache-stats", action="store_true", help="Print cache statistics")
    parser.add_argument("--clear-cache", action="store_true", help="Delete the cache file")

    args = parser.parse_args()

    if args.cache_stats or args.clear_cache:
        services = build_services(settings)
        if args.clear_cache:
            services.cache.clear()
            print("[*] Cache cleared")
        if args.cache_stats:
            print(json.dumps(services.cache.stats(), indent=2))
        return

    if not args.idea:
        parser.error("--idea is required unless managing the cache")

    print(f"Idea: {args.idea}")
    print("-" * 50)

    try:
        if args.search:
            results = asyncio.run(run_search(args.search, args.idea))
            print(json.dumps(results, indent=2))
            return
        data = asyncio.run(run_live(args.idea)) if args.live else analyze_idea(args.idea)
    except (AGIError, AdvisorGenerationError, LLMConfigError) as e:
        print(f"\n[!] Error: {e}")
        sys.exit(1)

    print_analysis(data)


if __name__ == "__main__":
    main()
