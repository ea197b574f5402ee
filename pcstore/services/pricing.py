# pcstore/services/pricing.py
"""
Reguły cenowe.

Cena produktu = cena bazowa + suma(cena dodatkowa specyfikacji * ilość).
Wszystko w Decimal, zaokrąglane do groszy (ROUND_HALF_UP).
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def link_price(additional_price, quantity: int) -> Decimal:
    return to_money(Decimal(str(additional_price)) * quantity)


def effective_price(base_price, links) -> Decimal:
    total = to_money(base_price)
    for link in links:
        total += link_price(link.specification.additional_price, link.quantity)
    return to_money(total)


def compute_effective_price(product) -> Decimal:
    return effective_price(product.base_price, product.specification_links)


def compute_total(products: Iterable) -> Decimal:
    #każdy produkt liczony raz - zamówienie nie ma ilości na linii
    return to_money(sum((to_money(p.price) for p in products), Decimal("0.00")))
