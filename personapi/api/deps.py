from fastapi import Request

from personapi.core.config import Settings
from personapi.services.storage.person_store import PersonStore


def get_store(request: Request) -> PersonStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
