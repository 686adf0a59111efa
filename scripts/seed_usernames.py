# scripts/seed_usernames.py
"""
Force a full rebuild of the username set on a running server.

Usage:
  python -m scripts.seed_usernames [--url http://127.0.0.1:8000] [--deadline 60]

Reads ADMIN_TOKEN from the environment (same settings as the server).
"""
import argparse
import asyncio
import sys
import time
import httpx
from config.settings import settings
from util.constants import InternalURIs
from util.enums import Color


async def reseed(
    base_url: str,
    timeout: float = 60.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    headers = {"Authorization": f"Bearer {settings.ADMIN_TOKEN}"}
    async with httpx.AsyncClient(
        base_url=base_url, headers=headers, timeout=timeout, transport=transport
    ) as client:
        res = await client.get(InternalURIs.USERNAME_CACHE)
        res.raise_for_status()
        print(f"Current cache count: {res.json()['count']}")

        print("Clearing existing cache...")
        res = await client.delete(InternalURIs.USERNAME_CACHE)
        res.raise_for_status()

        print("Seeding usernames from the account store...")
        res = await client.post(InternalURIs.USERNAME_CACHE_RESEED)
        res.raise_for_status()
        return int(res.json()["count"])


async def run(
    base_url: str,
    deadline: float = 60.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    # One budget for the whole count/clear/reseed sequence.
    return await asyncio.wait_for(
        reseed(base_url, timeout=deadline, transport=transport), timeout=deadline
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--url", default="http://127.0.0.1:8000")
    parser.add_argument("--deadline", type=float, default=60.0, help="seconds for the whole run")
    args = parser.parse_args(argv)

    t0 = time.perf_counter()
    try:
        count = asyncio.run(run(args.url, deadline=args.deadline))
    except asyncio.TimeoutError:
        print(
            f"{Color.RED}Failed to seed usernames: no answer within "
            f"{args.deadline:.0f}s{Color.RESET}",
            file=sys.stderr,
        )
        return 1
    except httpx.HTTPStatusError as e:
        print(
            f"{Color.RED}Failed to seed usernames: HTTP {e.response.status_code} "
            f"{e.response.text}{Color.RESET}",
            file=sys.stderr,
        )
        return 1
    except httpx.HTTPError as e:
        print(f"{Color.RED}Failed to seed usernames: {e}{Color.RESET}", file=sys.stderr)
        return 1

    elapsed = time.perf_counter() - t0
    print(f"{Color.GREEN}✓ Seeded {count} usernames in {elapsed:.2f}s{Color.RESET}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
