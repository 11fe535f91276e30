"""Centralized FastAPI dependency type aliases.

Each alias maps to one ``get_*`` factory and can be overridden in tests via
``app.dependency_overrides[get_xxx] = ...``.
"""

from typing import Annotated

from fastapi import Depends

from shopal.configs.config import AppConfig, get_app_config
from shopal.core.service import ChatService, get_chat_service

AppConfigDep = Annotated[AppConfig, Depends(get_app_config)]
ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
