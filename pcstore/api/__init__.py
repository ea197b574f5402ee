# pcstore/api/__init__.py
from fastapi import FastAPI

from pcstore.api.routers import (
    comments,
    favorites,
    health,
    orders,
    password,
    payments,
    products,
    specifications,
    users,
)


def include_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(password.router)
    app.include_router(products.router)
    app.include_router(specifications.router)
    app.include_router(orders.router)
    app.include_router(payments.router)
    app.include_router(comments.router)
    app.include_router(favorites.router)
    return app
