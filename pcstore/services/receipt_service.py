# pcstore/services/receipt_service.py
from typing import Any, Dict

from pcstore.data.models.payment import PaymentModel
from pcstore.services.pricing import to_money

WIDTH = 48


def _line(left: str, right: str) -> str:
    space = max(WIDTH - len(left) - len(right), 1)
    return f"{left}{' ' * space}{right}"


class ReceiptRenderer:
    """Paragon tekstowy dla opłaconego zamówienia."""

    def render(self, order: Dict[str, Any], payment: PaymentModel, username: str | None) -> bytes:
        lines = [
            "PC STORE".center(WIDTH),
            "RECEIPT".center(WIDTH),
            "=" * WIDTH,
            f"Order:    #{order['id']}",
            f"Customer: {username or '-'}",
            f"Paid at:  {payment.paid_at:%Y-%m-%d %H:%M:%S}",
            f"Method:   {payment.method}",
            "-" * WIDTH,
        ]
        for product in order["products"]:
            name = product["name"]
            if len(name) > WIDTH - 14:
                name = name[: WIDTH - 17] + "..."
            lines.append(_line(name, f"{to_money(product['price'])}"))

        lines += [
            "-" * WIDTH,
            #kwota z płatności, nie z aktualnych cen produktów
            _line("TOTAL", f"{to_money(payment.amount)}"),
            "=" * WIDTH,
            f"Payment #{payment.id} {payment.status}",
            "",
        ]
        return "\n".join(lines).encode("utf-8")
