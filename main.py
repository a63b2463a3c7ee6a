"""
main.py
--------
Command-line entry point: build one itinerary and print it as JSON.

Run:
  python main.py --city Barcelona --audience couple --interests romantic --date 2025-09-19 --budget 150

Without GOOGLE_PLACES_API_KEY the bundled city data is used; with
USE_STUB_LLM=true (the default) all text comes from templates.
"""

from __future__ import annotations
import argparse
import asyncio
import json
import sys
from datetime import date

from modules.input.filter_intake import InvalidFilterParams, parse_filter_params
from modules.planning.itinerary_builder import ItineraryBuilder
from modules.tool_usage.llm_client import make_llm_client
from modules.tool_usage.text_tool import TextGenerator
from schemas.result import CollaboratorUnavailable
import config


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a one-day itinerary.")
    parser.add_argument("--city", default="Barcelona")
    parser.add_argument("--audience", default="couple")
    parser.add_argument("--interests", default="romantic", help="comma-separated")
    parser.add_argument("--date", default=date.today().isoformat())
    parser.add_argument("--budget", default=str(config.DEFAULT_BUDGET))
    parser.add_argument("--preview", action="store_true", help="title and subtitle only")
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config.configure_logging(args.log_level)

    try:
        params = parse_filter_params(vars(args))
    except InvalidFilterParams as exc:
        print(f"  ✗ {exc}", file=sys.stderr)
        return 2

    builder = ItineraryBuilder(text_generator=TextGenerator(make_llm_client()))
    try:
        if args.preview:
            output = asyncio.run(builder.build_preview(params))
        else:
            output = asyncio.run(builder.build_itinerary(params)).to_dict()
    except CollaboratorUnavailable as exc:
        print(f"  ✗ {exc}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
