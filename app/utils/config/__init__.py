from fastapi import Request

from app.utils.config.env import Settings


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was built with."""
    return request.app.state.settings
