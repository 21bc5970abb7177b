"""Tests that the server handles many concurrent requests correctly.

The app is async (FastAPI + asyncpg pool), so shorten requests interleave at
every store call. Codes must stay unique no matter how they interleave.
"""

import asyncio
import pytest


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Prove the server handles many simultaneous requests."""

    async def test_concurrent_shorten_requests(self, client, store):
        """Many concurrent POST /shorten with different URLs; all succeed and codes are unique."""
        concurrency = 30
        urls = [f"https://example.com/page_{i}" for i in range(concurrency)]
        tasks = [
            client.post("/shorten", json={"originalUrl": url})
            for url in urls
        ]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        short_codes = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 201, f"Request {i}: status {r.status_code} body={r.text}"
            data = r.json()
            assert data["originalUrl"] == urls[i]
            short_codes.append(data["shortCode"])

        assert len(short_codes) == len(set(short_codes)), "All codes must be unique under concurrency"
        assert len(store.by_code) == concurrency

    async def test_concurrent_shorten_with_forced_collisions(
        self, client, store, shorten_service, scripted_generator
    ):
        """Every request starts from the same candidate code and the store check is blind."""
        store.blind = True
        concurrency = 10
        shorten_service.conflict_retries = concurrency
        shorten_service.resolver.generator = scripted_generator(["dup001"] * concurrency)

        urls = [f"https://example.com/collide_{i}" for i in range(concurrency)]
        responses = await asyncio.gather(
            *(client.post("/shorten", json={"originalUrl": url}) for url in urls)
        )

        assert all(r.status_code == 201 for r in responses), [r.text for r in responses]
        codes = [r.json()["shortCode"] for r in responses]
        assert len(set(codes)) == concurrency
        assert codes.count("dup001") == 1

    async def test_concurrent_same_url(self, client, store):
        """Concurrent first-time requests for one URL yield one mapping."""
        url = "https://example.com/hot"
        responses = await asyncio.gather(
            *(client.post("/shorten", json={"originalUrl": url}) for _ in range(10))
        )

        statuses = sorted(r.status_code for r in responses)
        assert statuses.count(201) == 1
        assert statuses.count(200) == 9
        assert len({r.json()["shortUrl"] for r in responses}) == 1
        assert len(store.by_code) == 1

    async def test_concurrent_redirect_requests(self, client):
        """Create one short URL, then many concurrent redirect (GET /{code}) requests all succeed."""
        create_resp = await client.post(
            "/shorten",
            json={"originalUrl": "https://example.com/redirect-target"},
        )
        assert create_resp.status_code == 201
        short_code = create_resp.json()["shortCode"]

        tasks = [
            client.get(f"/{short_code}", follow_redirects=False)
            for _ in range(20)
        ]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 302, f"Request {i}: status {r.status_code}"
            assert r.headers.get("location") == "https://example.com/redirect-target"
