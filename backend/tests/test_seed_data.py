from scripts.seed_data import DEMO_CUSTOMERS, seed_queue


async def test_seed_fills_empty_queue(service):
    await seed_queue(service)

    entries = await service.list_active()
    assert [e.name for e in entries] == [c["name"] for c in DEMO_CUSTOMERS]


async def test_seed_skips_populated_queue(service):
    await service.join("Zed")

    await seed_queue(service)

    assert [e.name for e in await service.list_active()] == ["Zed"]
