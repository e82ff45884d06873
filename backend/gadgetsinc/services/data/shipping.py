"""
Shipping Directory - Deterministic shipping, package and order records

There is no shipping database. Every record is derived from its identifier
with a seeded generator, so the same identifier always yields the same
record (dates are relative to the directory's clock). String identifiers
are seeded through CRC-32 rather than ``hash()``, which is randomized per
process.
"""

import random
import zlib
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable, Dict, List, Union


# =============================================================================
# Rates
# =============================================================================

BASE_RATES: Dict[str, Decimal] = {
    "domestic": Decimal("5.99"),
    "usa": Decimal("5.99"),
    "us": Decimal("5.99"),
    "canada": Decimal("12.99"),
    "europe": Decimal("19.99"),
    "asia": Decimal("24.99"),
}
INTERNATIONAL_RATE = Decimal("29.99")
RATE_PER_KG = Decimal("2.50")


def shipping_cost(weight_in_kg: float, destination: str) -> Decimal:
    """Estimated shipping cost in USD: destination base rate plus a per-kg charge"""
    base_rate = BASE_RATES.get(destination.lower(), INTERNATIONAL_RATE)
    weight_cost = Decimal(str(weight_in_kg)) * RATE_PER_KG
    return (base_rate + weight_cost).quantize(Decimal("0.01"))


def stable_seed(value: Union[int, str]) -> int:
    """Seed that is identical across processes for the same identifier"""
    if isinstance(value, int):
        return value
    return zlib.crc32(value.encode("utf-8"))


# =============================================================================
# Records
# =============================================================================

SHIPPING_STATUSES = ("Processing", "Shipped", "In Transit", "Out for Delivery", "Delivered", "Exception")
SHIPPING_CARRIERS = ("UPS", "FedEx", "DHL", "USPS")
ORIGINS = ("New York, NY", "Los Angeles, CA", "Chicago, IL", "Houston, TX", "Phoenix, AZ")
DESTINATIONS = ("Seattle, WA", "Miami, FL", "Denver, CO", "Boston, MA", "Atlanta, GA")

PACKAGE_TYPES = ("Electronics", "Clothing", "Books", "Home & Garden", "Automotive", "Health & Beauty")
PACKAGE_LOCATIONS = ("Warehouse A", "Distribution Center B", "Local Facility C", "Delivery Vehicle", "Customer")

ORDER_STATUSES = ("Processing", "Shipped", "Out for Delivery", "Delivered")
ORDER_CARRIERS = ("UPS", "FedEx", "USPS")


@dataclass(frozen=True)
class ShippingRecord:
    shipping_id: int
    status: str
    carrier: str
    tracking_number: str
    origin: str
    destination: str
    shipped_date: date
    expected_delivery: date


@dataclass(frozen=True)
class PackageRecord:
    package_id: str
    package_type: str
    weight_lbs: float
    length_in: int
    width_in: int
    height_in: int
    current_location: str
    insurance_value: int
    fragile: bool
    last_scanned: datetime


@dataclass(frozen=True)
class OrderTracking:
    order_number: str
    status: str
    carrier: str
    tracking_number: str
    estimated_delivery: date
    as_of: date


class ShippingDirectory:
    """
    Read-only view over the seeded shipping dataset.

    Args:
        clock: Returns "now"; injected so tests can pin dates
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def shipping(self, shipping_id: int) -> ShippingRecord:
        rng = random.Random(stable_seed(shipping_id))
        status = rng.choice(SHIPPING_STATUSES)
        carrier = rng.choice(SHIPPING_CARRIERS)
        origin = rng.choice(ORIGINS)
        destination = rng.choice(DESTINATIONS)
        tracking_number = f"{carrier.upper()}{rng.randrange(100000000, 999999999)}"

        shipped_date = self.now().date() - timedelta(days=rng.randrange(1, 10))
        expected_delivery = shipped_date + timedelta(days=rng.randrange(3, 7))

        return ShippingRecord(
            shipping_id=shipping_id,
            status=status,
            carrier=carrier,
            tracking_number=tracking_number,
            origin=origin,
            destination=destination,
            shipped_date=shipped_date,
            expected_delivery=expected_delivery,
        )

    def package(self, package_id: str) -> PackageRecord:
        rng = random.Random(stable_seed(package_id))
        package_type = rng.choice(PACKAGE_TYPES)
        location = rng.choice(PACKAGE_LOCATIONS)
        weight = round(rng.random() * 50 + 0.5, 2)  # 0.5 to 50.5 lbs

        return PackageRecord(
            package_id=package_id,
            package_type=package_type,
            weight_lbs=weight,
            length_in=rng.randrange(6, 36),
            width_in=rng.randrange(4, 24),
            height_in=rng.randrange(2, 18),
            current_location=location,
            insurance_value=rng.randrange(50, 2000),
            fragile=rng.random() > 0.7,
            last_scanned=self.now() - timedelta(hours=rng.randrange(1, 48)),
        )

    def order(self, order_number: str) -> OrderTracking:
        rng = random.Random(stable_seed(order_number))
        status = rng.choice(ORDER_STATUSES)
        carrier = rng.choice(ORDER_CARRIERS)
        tracking_number = f"{carrier}{rng.randrange(100000, 999999)}"
        today = self.now().date()

        return OrderTracking(
            order_number=order_number,
            status=status,
            carrier=carrier,
            tracking_number=tracking_number,
            estimated_delivery=today + timedelta(days=rng.randrange(1, 5)),
            as_of=today,
        )

    def search(self, term: str) -> List[str]:
        """
        Shipment and package records matching a search term.

        Returns 1-5 one-line descriptions; the same term always yields the
        same lines.
        """
        rng = random.Random(stable_seed(term))
        lines = []
        for _ in range(rng.randrange(1, 6)):
            if rng.random() > 0.5:
                shipping_id = rng.randrange(1000, 9999)
                status = rng.choice(("Processing", "Shipped", "In Transit", "Delivered"))
                destination = rng.choice(("New York", "Los Angeles", "Chicago", "Houston"))
                lines.append(f"Shipping #{shipping_id} - Status: {status} - Destination: {destination}")
            else:
                package_id = f"PKG{rng.randrange(100000, 999999)}"
                package_type = rng.choice(("Electronics", "Clothing", "Books"))
                location = rng.choice(("Warehouse", "In Transit", "Local Facility"))
                lines.append(f"Package {package_id} - Type: {package_type} - Location: {location}")
        return lines
