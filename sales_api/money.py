from dataclasses import dataclass

from sales_api.config import Settings


@dataclass(frozen=True, slots=True)
class MoneyFormatter:
    currency: str = "USD"
    decimals: int = 2

    @staticmethod
    def from_settings(settings: Settings) -> "MoneyFormatter":
        return MoneyFormatter(currency=settings.currency, decimals=settings.decimals)

    def __call__(self, amount: float) -> str:
        return f"{amount:.{self.decimals}f} {self.currency}"
