"""Catalog seed data.

Populates empty brand, type and product collections with a small,
deterministic sporting-goods catalog. Collections that already hold
documents are left untouched.
"""

from decimal import Decimal
from typing import Any

import structlog

from catalog_api.catalog.filters import Predicate
from catalog_api.catalog.models import Product, ProductBrand, ProductType
from catalog_api.catalog.store import CatalogStore

logger = structlog.get_logger()


# ============================================================================
# Seed Data
# ============================================================================

BRANDS = [
    ProductBrand(id="63ca5e40e0aa3968b549af53", name="Adidas"),
    ProductBrand(id="63ca5e4c455a3f3f4b8ce9ad", name="ASICS"),
    ProductBrand(id="63ca5e5b9e4d3b2c7a1f0e12", name="Victor"),
    ProductBrand(id="63ca5e67b8f1a4d2c3e5f789", name="Yonex"),
    ProductBrand(id="63ca5e73c2d4e6f8a0b1c345", name="Puma"),
    ProductBrand(id="63ca5e7fd1e3f5a7b9c2d456", name="Nike"),
    ProductBrand(id="63ca5e8be0f2a4b6c8d3e567", name="Babolat"),
]

TYPES = [
    ProductType(id="63ca5d4bc3a8a58f47299f97", name="Shoes"),
    ProductType(id="63ca5d6d958e43ee1cd375fe", name="Rackets"),
    ProductType(id="63ca5d7d380402dce7f06ebd", name="Football"),
    ProductType(id="63ca5d8849bc19321b8ecd3b", name="Kit Bags"),
]

_BRANDS = {b.name: b for b in BRANDS}
_TYPES = {t.name: t for t in TYPES}


def _product(
    product_id: str,
    name: str,
    summary: str,
    price: str,
    brand: str,
    product_type: str,
    image_file: str,
) -> Product:
    return Product(
        id=product_id,
        name=name,
        summary=summary,
        description=f"{name}. {summary}",
        image_file=image_file,
        price=Decimal(price),
        brand=_BRANDS[brand],
        type=_TYPES[product_type],
    )


PRODUCTS = [
    _product(
        "602d2149e773f2a3990b47f5",
        "Adidas Quick Force Indoor Badminton Shoes",
        "Lightweight indoor court shoes with gum rubber outsole.",
        "3500",
        "Adidas",
        "Shoes",
        "images/products/adidas_shoe-1.png",
    ),
    _product(
        "602d2149e773f2a3990b47f6",
        "Yonex VCORE Pro 100 A Tennis Racquet",
        "Head-light balance for fast swing speed.",
        "5200",
        "Yonex",
        "Rackets",
        "images/products/tennis_racquet-1.png",
    ),
    _product(
        "602d2149e773f2a3990b47f7",
        "Nike Strike Football",
        "Machine-stitched training ball with high-visibility graphics.",
        "1200",
        "Nike",
        "Football",
        "images/products/football-1.png",
    ),
    _product(
        "602d2149e773f2a3990b47f8",
        "Babolat Pure Aero Tennis Racquet",
        "Spin-friendly frame for baseline players.",
        "6400",
        "Babolat",
        "Rackets",
        "images/products/tennis_racquet-2.png",
    ),
    _product(
        "602d2149e773f2a3990b47f9",
        "ASICS Gel-Rocket 10 Court Shoes",
        "Stable indoor shoe with GEL cushioning.",
        "4200",
        "ASICS",
        "Shoes",
        "images/products/asics_shoe-1.png",
    ),
    _product(
        "602d2149e773f2a3990b47fa",
        "Victor Multithermo Kit Bag",
        "Twelve-racket bag with thermal compartment.",
        "2800",
        "Victor",
        "Kit Bags",
        "images/products/kit_bag-1.png",
    ),
    _product(
        "602d2149e773f2a3990b47fb",
        "Puma Orbita Football",
        "Thermo-bonded match ball.",
        "1800",
        "Puma",
        "Football",
        "images/products/football-2.png",
    ),
    _product(
        "602d2149e773f2a3990b47fc",
        "Yonex Pro Tournament Kit Bag",
        "Six-racket bag with shoe pocket.",
        "3100",
        "Yonex",
        "Kit Bags",
        "images/products/kit_bag-2.png",
    ),
]


# ============================================================================
# Seeding
# ============================================================================


async def seed_catalog(store: CatalogStore) -> dict[str, Any]:
    """Seed empty catalog collections.

    Args:
        store: Catalog store to populate.

    Returns:
        Number of documents inserted per collection.
    """
    result = {"brands": 0, "types": 0, "products": 0}

    if not await store.list_brands():
        await store.insert_brands(BRANDS)
        result["brands"] = len(BRANDS)

    if not await store.list_types():
        await store.insert_types(TYPES)
        result["types"] = len(TYPES)

    if await store.count(Predicate.match_all()) == 0:
        for product in PRODUCTS:
            await store.insert(product)
        result["products"] = len(PRODUCTS)

    logger.info("Catalog seeded", **result)
    return result
