"""
Product Catalog - Read-only in-memory product, stock and support data

The catalog is built once at startup and passed by reference to the tools
that query it. Nothing in here mutates after construction.
"""

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Product:
    """A catalog entry"""
    product_number: int
    name: str
    description: str
    price: Decimal
    tags: Tuple[str, ...]
    category: str

    @property
    def summary(self) -> str:
        """One-line sales summary, e.g. 'GadgetsInc Laptop Pro - ... Price: $1,299'"""
        return f"{self.name} - {self.description}. Price: ${self.price:,.0f}"


@dataclass(frozen=True)
class StockEntry:
    """Inventory level for a product line"""
    product_key: str
    units: int
    status: str = "In Stock"


@dataclass(frozen=True)
class TagMatch:
    """A product found by tag search, with the tags that matched"""
    product: Product
    matched_tags: Tuple[str, ...]


class CatalogStore:
    """
    Read-only keyed container for the product catalog.

    Products are keyed by product number. Product lines ("smartphone",
    "laptop", ...) map onto a representative product and a stock entry.
    """

    def __init__(
        self,
        products: Iterable[Product],
        product_lines: Mapping[str, int],
        stock: Iterable[StockEntry],
        support_topics: Mapping[str, str],
    ):
        self._products: Mapping[int, Product] = MappingProxyType(
            {p.product_number: p for p in products}
        )
        self._product_lines: Mapping[str, int] = MappingProxyType(dict(product_lines))
        self._stock: Mapping[str, StockEntry] = MappingProxyType(
            {entry.product_key: entry for entry in stock}
        )
        self._support_topics: Mapping[str, str] = MappingProxyType(dict(support_topics))

        missing = [key for key, number in self._product_lines.items() if number not in self._products]
        if missing:
            raise ValueError(f"Product lines reference unknown products: {', '.join(missing)}")

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    def get_product(self, product_number: int) -> Optional[Product]:
        return self._products.get(product_number)

    def product_numbers(self) -> List[int]:
        return sorted(self._products)

    def products(self) -> List[Product]:
        """All products, ascending by product number"""
        return [self._products[n] for n in self.product_numbers()]

    def search(self, term: str) -> List[Product]:
        """
        Case-insensitive substring search over name, description and category.

        Results are sorted ascending by product number.
        """
        needle = term.lower()
        return [
            p for p in self.products()
            if needle in p.name.lower()
            or needle in p.description.lower()
            or needle in p.category.lower()
        ]

    def search_tags(self, term: str) -> List[TagMatch]:
        """Case-insensitive substring search over product tags"""
        needle = term.lower()
        matches = []
        for product in self.products():
            matched = tuple(tag for tag in product.tags if needle in tag.lower())
            if matched:
                matches.append(TagMatch(product=product, matched_tags=matched))
        return matches

    def all_tags(self) -> List[str]:
        """Distinct tags across the catalog, alphabetically (case-insensitive)"""
        tags = {tag for product in self._products.values() for tag in product.tags}
        return sorted(tags, key=lambda t: (t.casefold(), t))

    # -------------------------------------------------------------------------
    # Product lines & stock
    # -------------------------------------------------------------------------

    def product_line_keys(self) -> List[str]:
        return list(self._product_lines)

    def product_for_line(self, key: str) -> Optional[Product]:
        number = self._product_lines.get(key.lower())
        return self._products.get(number) if number is not None else None

    def stock_for(self, key: str) -> Optional[StockEntry]:
        return self._stock.get(key.lower())

    # -------------------------------------------------------------------------
    # Support
    # -------------------------------------------------------------------------

    def support_topic(self, key: str) -> Optional[str]:
        return self._support_topics.get(key.lower())

    def support_topic_keys(self) -> List[str]:
        return list(self._support_topics)


# =============================================================================
# Static dataset
# =============================================================================

PRODUCTS: Tuple[Product, ...] = (
    Product(1001, "GadgetsInc Smartphone X1", "Latest 5G smartphone with AI-powered camera and 48-hour battery life",
            Decimal("899.00"), ("smartphone", "5G", "AI", "camera", "mobile"), "Electronics"),
    Product(1002, "GadgetsInc Laptop Pro", "High-performance laptop with 16GB RAM, 1TB SSD, and 15-hour battery",
            Decimal("1299.00"), ("laptop", "high-performance", "RAM", "SSD", "portable"), "Electronics"),
    Product(1003, "GadgetsInc Watch Elite", "Fitness tracking smartwatch with health monitoring and GPS",
            Decimal("399.00"), ("smartwatch", "fitness", "health", "GPS", "wearable"), "Wearables"),
    Product(1004, "GadgetsInc Audio Pro", "Wireless noise-canceling headphones with premium sound quality",
            Decimal("249.00"), ("headphones", "wireless", "noise-canceling", "audio", "music"), "Audio"),
    Product(1005, "GadgetsInc Tablet Max", "12-inch tablet with stylus support and all-day battery",
            Decimal("699.00"), ("tablet", "stylus", "productivity", "portable", "touch"), "Electronics"),
    Product(1006, "GadgetsInc Camera 4K", "Professional 4K camera with advanced stabilization",
            Decimal("1599.00"), ("camera", "4K", "professional", "stabilization", "photography"), "Photography"),
    Product(1007, "GadgetsInc Speaker Mesh", "Smart home speaker with voice assistant integration",
            Decimal("199.00"), ("speaker", "smart-home", "voice-assistant", "audio", "home"), "Smart Home"),
    Product(1008, "GadgetsInc Gaming Mouse", "High-precision gaming mouse with customizable RGB",
            Decimal("89.00"), ("mouse", "gaming", "precision", "RGB", "accessories"), "Gaming"),
    Product(1009, "GadgetsInc Drone Sky", "Consumer drone with 4K camera and 30-minute flight time",
            Decimal("899.00"), ("drone", "4K", "camera", "flight", "aerial"), "Drones"),
    Product(1010, "GadgetsInc Charger Ultra", "Fast wireless charger compatible with all devices",
            Decimal("59.00"), ("charger", "wireless", "fast-charging", "universal", "accessories"), "Accessories"),
)

# Product lines sold through the chat assistant, in the order they are advertised
PRODUCT_LINES: Dict[str, int] = {
    "smartphone": 1001,
    "laptop": 1002,
    "smartwatch": 1003,
    "headphones": 1004,
    "tablet": 1005,
}

STOCK: Tuple[StockEntry, ...] = (
    StockEntry("smartphone", 156),
    StockEntry("laptop", 43),
    StockEntry("smartwatch", 892),
    StockEntry("headphones", 234),
    StockEntry("tablet", 67),
)

SUPPORT_TOPICS: Dict[str, str] = {
    "warranty": "All GadgetsInc products come with a 2-year manufacturer warranty. Contact support at support@gadgetsinc.com for warranty claims.",
    "return": "30-day return policy for all products. Items must be in original condition. Return shipping is free for defective items.",
    "repair": "We offer repair services for all our products. Schedule a repair appointment at gadgetsinc.com/repair or call 1-800-GADGETS.",
    "shipping": "Free shipping on orders over $99. Standard shipping takes 3-5 business days. Express shipping available for next-day delivery.",
    "payment": "We accept all major credit cards, PayPal, and Apple Pay. Financing options available for purchases over $500.",
    "contact": "Customer Service: 1-800-GADGETS (1-800-423-4387), Email: support@gadgetsinc.com, Hours: Mon-Fri 8AM-8PM EST",
}


def build_default_catalog() -> CatalogStore:
    """Build the compiled-in GadgetsInc catalog"""
    return CatalogStore(
        products=PRODUCTS,
        product_lines=PRODUCT_LINES,
        stock=STOCK,
        support_topics=SUPPORT_TOPICS,
    )
