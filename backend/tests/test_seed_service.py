from app.services.seed_service import SAMPLE_PRODUCTS, seed_data


async def test_seed_fills_empty_catalog(repository):
    inserted = await seed_data(repository)

    assert inserted == len(SAMPLE_PRODUCTS)
    stats = await repository.get_stats()
    assert stats.total_products == len(SAMPLE_PRODUCTS)
    assert stats.categories == {
        "Books": 2,
        "Clothing": 2,
        "Electronics": 4,
        "Home Appliances": 3,
        "Sports": 1,
    }


async def test_seed_skips_non_empty_catalog(repository):
    await seed_data(repository)

    assert await seed_data(repository) == 0
    assert len(await repository.list_products()) == len(SAMPLE_PRODUCTS)
