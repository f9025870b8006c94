"""
Quick smoke check against live URLs. Run with: python smoke.py [rt|broken|seo]
Prints the batch result as JSON plus the red-link / redirect tallies.
"""

import asyncio
import json
import sys

from linkaudit.classifier import count_red_links, count_tracked_redirects
from linkaudit.core import fetch_urls

URLS = [
    "learn.microsoft.com/en-us/windows/",
    "https://www.python.org/",
    "https://httpbin.org/status/404",
]


async def main(fetch_type: str):
    print(f"\n>>> {fetch_type} check of {len(URLS)} URLs\n")
    results = await fetch_urls(URLS, fetch_type)
    print(json.dumps([result.to_dict() for result in results], indent=2))
    print("-" * 80)
    print(f"red links: {count_red_links(results)}")
    if fetch_type == "rt":
        print(f"redirect tallies: {count_tracked_redirects(results)}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "rt"))
