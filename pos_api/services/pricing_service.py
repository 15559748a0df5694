"""Line pricing: discount amount and sale price from a base price."""
from collections import namedtuple

from pos_api.models.sales_cart import DiscountType

PriceBreakdown = namedtuple('PriceBreakdown', ['discount_amount', 'sale_price', 'discount_value'])


def compute_price(base_price: int, discount_type, discount_value: int) -> PriceBreakdown:
    """
    Compute the discount amount and the resulting sale price.

    PERCENTAGE values are clamped to [0, 100] and the amount is floored.
    FIXED values are taken as-is, so a FIXED discount larger than the base
    price yields a negative sale price.

    The returned `discount_value` is the one actually applied (after clamping)
    and is what gets persisted on the line.
    """
    discount_type = DiscountType(discount_type)
    discount_amount = discount_value

    if discount_type == DiscountType.PERCENTAGE:
        discount_value = min(max(discount_value, 0), 100)
        # Integer floor division: exact for non-negative prices
        discount_amount = (discount_value * base_price) // 100

    return PriceBreakdown(
        discount_amount=discount_amount,
        sale_price=base_price - discount_amount,
        discount_value=discount_value,
    )
