from enum import Enum

LOW_STOCK_THRESHOLD = 3


class Availability(str, Enum):
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


def classify(stock_count: int) -> Availability:
    if stock_count <= 0:
        return Availability.OUT_OF_STOCK
    if stock_count <= LOW_STOCK_THRESHOLD:
        return Availability.LOW_STOCK
    return Availability.IN_STOCK


def status_text(stock_count: int) -> str:
    """Human readable status, low stock surfaces the exact remaining count."""
    tier = classify(stock_count)
    if tier is Availability.OUT_OF_STOCK:
        return "Out of stock"
    if tier is Availability.LOW_STOCK:
        return f"Only {stock_count} left"
    return "In stock"
