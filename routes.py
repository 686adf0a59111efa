# routes.py
from fastapi import FastAPI
from controller.admin_controller import admin_router
from controller.username_controller import username_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(username_router)
    app.include_router(admin_router)
