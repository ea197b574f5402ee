# pcstore/domain/exceptions.py
"""
Wyjątki domenowe.

Serwisy rzucają je przy naruszeniu reguł biznesowych, routery tłumaczą je
na kody HTTP. Brak uprawnień to wbudowany PermissionError (403).
"""


class StoreError(Exception):
    """Baza dla błędów domenowych."""


class NotFoundError(StoreError):
    """Obiekt (user, produkt, specyfikacja, zamówienie, płatność) nie istnieje."""


class ConflictError(StoreError):
    """Duplikat albo konflikt współbieżności."""


class InvalidStateError(ConflictError):
    """Operacja niedozwolona w aktualnym stanie zamówienia (np. PAID)."""


class ValidationError(StoreError):
    """Niepoprawne dane wejściowe."""


class AuthenticationError(StoreError):
    """Złe dane logowania albo token."""
