"""Seed service for initial data"""
import asyncio
import logging

from app.core.config import settings
from app.core.logging import configure_logging
from app.schemas.product import ProductCreate
from app.services.product_repository import ProductRepository, open_repository

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    ProductCreate(name="Samsung Galaxy S24", price=25000, description="Latest Samsung smartphone with a great camera and a fast processor", category="Electronics", stock=25),
    ProductCreate(name="Sony WH-1000XM5 Headphones", price=8500, description="Wireless headphones with active noise cancelling", category="Electronics", stock=30),
    ProductCreate(name="Delonghi Magnifica Coffee Machine", price=15000, description="Automatic coffee machine with a built-in grinder", category="Home Appliances", stock=10),
    ProductCreate(name="Dyson V15 Detect Vacuum", price=18000, description="Cordless vacuum with a laser dust detector", category="Home Appliances", stock=8),
    ProductCreate(name="Nike Dri-FIT T-Shirt", price=1200, description="Sports t-shirt with moisture-wicking fabric", category="Clothing", stock=50),
    ProductCreate(name='Book "Clean Code"', price=800, description="Robert Martin's guide to writing quality code", category="Books", stock=15),
    ProductCreate(name="Dumbbells 2x5kg", price=2500, description="Dumbbells for home workouts", category="Sports", stock=20),
    ProductCreate(name="ASUS ROG Laptop", price=45000, description="Gaming laptop with an RTX 4060 graphics card", category="Electronics", stock=5),
    ProductCreate(name="iPad Air", price=22000, description='Apple tablet with the M1 chip and a 10.9" display', category="Electronics", stock=12),
    ProductCreate(name="LG Microwave Oven", price=3500, description="25 L microwave oven with grill", category="Home Appliances", stock=18),
    ProductCreate(name="Adidas Ultraboost Sneakers", price=4200, description="Running shoes with Boost cushioning", category="Clothing", stock=35),
    ProductCreate(name='Book "JavaScript: The Definitive Guide"', price=1200, description="Complete JavaScript programming reference", category="Books", stock=8),
]


async def seed_data(repository: ProductRepository) -> int:
    """Insert the sample catalog if the table is empty. Returns how many rows were added."""
    existing = await repository.list_products()
    if existing:
        logger.info("Catalog already contains %d products, skipping seed", len(existing))
        return 0

    for product in SAMPLE_PRODUCTS:
        await repository.create_product(product)

    logger.info("Database seeded with %d sample products", len(SAMPLE_PRODUCTS))
    return len(SAMPLE_PRODUCTS)


async def _run():
    async with open_repository(settings.DATABASE_URL) as repository:
        await seed_data(repository)
        stats = await repository.get_stats()

    logger.info("Total products: %d", stats.total_products)
    logger.info("Total value: %.2f", stats.total_value)
    logger.info("Average price: %.2f", stats.average_price)
    logger.info("Total stock: %d", stats.total_stock)


def main():
    """Console entry point: seed the configured database."""
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(_run())


if __name__ == "__main__":
    main()
