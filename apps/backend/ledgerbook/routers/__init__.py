"""Router aggregation."""

from fastapi import FastAPI

from . import transactions, users


def register_routers(app: FastAPI) -> None:
    """Attach all API routes to the FastAPI application."""

    app.include_router(users.router, prefix="/api")
    app.include_router(transactions.router, prefix="/api")
