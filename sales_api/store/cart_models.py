from dataclasses import dataclass


@dataclass(slots=True)
class CartLine:
    product_id: str
    quantity: int = 1


@dataclass(slots=True)
class CartLineAdjustment:
    product_id: str
    old_quantity: int
    new_quantity: int

    @property
    def removed(self) -> bool:
        return self.new_quantity == 0
