"""
Load test for the member profile-level endpoint.
Simulates hundreds of members opening their dashboard at once.

Needs a dev server with seeded profiles (python seed_profiles.py) and
signed session cookies for them; set SESSION_COOKIES to a list of
`session=...` cookie values copied from a browser or the test client.
"""

import asyncio
import random
import time
import aiohttp

# -----------------------------
# CONFIG — ADJUST IF NEEDED
# -----------------------------
BASE_URL = "http://127.0.0.1:5000"

# Cookie values for signed-in members
SESSION_COOKIES = []

# Total GET requests to send
TOTAL_REQUESTS = 2000

# How many run simultaneously
MAX_CONCURRENT = 150


# -----------------------------
# Load test functions
# -----------------------------
async def fetch_level(session, cookie):
    headers = {"Cookie": f"session={cookie}"} if cookie else {}
    try:
        async with session.get(f"{BASE_URL}/api/member/profile-level", headers=headers) as resp:
            if resp.status != 200:
                text = await resp.text()
                print(f"[ERROR {resp.status}] {text[:200]}")
                return None
            data = await resp.json()
            return data.get("level")
    except Exception as e:
        print(f"[EXCEPTION] {e}")
        return None


async def worker(sem, session, results):
    async with sem:
        cookie = random.choice(SESSION_COOKIES) if SESSION_COOKIES else None
        level = await fetch_level(session, cookie)
        results.append(level)


async def main():
    sem = asyncio.Semaphore(MAX_CONCURRENT)
    results = []

    async with aiohttp.ClientSession() as session:
        print(f"Sending {TOTAL_REQUESTS} requests with concurrency {MAX_CONCURRENT}...")
        start = time.time()

        await asyncio.gather(*(worker(sem, session, results) for _ in range(TOTAL_REQUESTS)))

        end = time.time()
        print(f"Completed in {end - start:.2f} seconds")

    ok = [r for r in results if r is not None]
    print(f"{len(ok)}/{len(results)} succeeded")
    for level in (1, 2, 3, 4):
        print(f"  rank {level}: {ok.count(level)}")


if __name__ == "__main__":
    asyncio.run(main())
