#!/usr/bin/env python3
"""
Script to regenerate the bundled holiday table from BrasilAPI.
Fetches the previous, current and next year and rewrites the generated block
in br_holiday/data/static_holidays.py.
"""

import argparse
import asyncio
import json
import re
import sys
from datetime import date
from pathlib import Path

import structlog

from br_holiday.core.logging import configure_logging
from br_holiday.services.brasil_api import APIError, BrasilAPIClient

logger = structlog.get_logger(__name__)

DATA_MODULE = (
    Path(__file__).resolve().parents[1] / "br_holiday" / "data" / "static_holidays.py"
)

GENERATED_BLOCK = re.compile(
    r"# --- BEGIN GENERATED HOLIDAYS ---\n.*?# --- END GENERATED HOLIDAYS ---",
    re.DOTALL,
)


def render_block(holidays_by_year: dict) -> str:
    lines = ["# --- BEGIN GENERATED HOLIDAYS ---", "_RAW_HOLIDAYS = {"]
    for year, holidays in sorted(holidays_by_year.items()):
        lines.append(f"    {year}: [")
        for holiday in holidays:
            record = json.dumps(holiday.model_dump(), ensure_ascii=False)
            lines.append(f"        {record},")
        lines.append("    ],")
    lines.append("}")
    lines.append("# --- END GENERATED HOLIDAYS ---")
    return "\n".join(lines)


async def fetch_years(years: list[int]) -> dict:
    client = BrasilAPIClient()
    return {year: await client.fetch_holidays(year) for year in years}


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--around",
        type=int,
        default=date.today().year,
        help="Centre year of the snapshot (default: current year)",
    )
    parser.add_argument(
        "--span",
        type=int,
        default=1,
        help="Years to include on each side of the centre year",
    )
    args = parser.parse_args()

    configure_logging()
    years = list(range(args.around - args.span, args.around + args.span + 1))

    try:
        holidays_by_year = asyncio.run(fetch_years(years))
    except APIError as e:
        logger.error("Static data generation failed", error=str(e), year=e.year)
        return 1

    source = DATA_MODULE.read_text(encoding="utf-8")
    if not GENERATED_BLOCK.search(source):
        logger.error("Generated block markers not found", path=str(DATA_MODULE))
        return 1

    block = render_block(holidays_by_year)
    DATA_MODULE.write_text(
        GENERATED_BLOCK.sub(lambda _: block, source), encoding="utf-8"
    )
    logger.info("Static holiday data updated", years=years, path=str(DATA_MODULE))
    return 0


if __name__ == "__main__":
    sys.exit(main())
