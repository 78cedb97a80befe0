# tests/test_concurrency.py
import asyncio

import httpx

AUTH = {"x-auth-token": "12345"}


async def _create_task(client, i):
    return await client.post("/api/products", json={"name": f"item-{i}", "price": 10 + i}, headers=AUTH)


async def _run_creates(app, n):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await asyncio.gather(*(_create_task(ac, i) for i in range(n)))


def test_concurrent_creates(app, store):
    results = asyncio.run(_run_creates(app, 20))

    assert [r.status_code for r in results] == [201] * 20
    ids = sorted(r.json()["data"]["id"] for r in results)
    # nothing was deleted, so length-based ids stay unique
    assert ids == list(range(3, 23))
    assert len(store) == 22


def test_concurrent_updates_keep_every_field(app, store):
    async def run():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            return await asyncio.gather(*(
                ac.put("/api/products/1", json={"name": "Phone", "price": 800, f"field_{i}": i}, headers=AUTH)
                for i in range(10)
            ))

    results = asyncio.run(run())
    assert all(r.status_code == 200 for r in results)
    product = store.get(1)
    assert all(product[f"field_{i}"] == i for i in range(10))
