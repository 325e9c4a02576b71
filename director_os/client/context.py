"""
Client wiring.

Builds the whole client data layer from ClientSettings so callers (UI,
scripts, tests) get one object instead of module-level singletons.

Usage:
    ctx = build_client_context()
    ctx.session.login("director")
    bundle = ctx.data.get_dashboard()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from director_os.client.backends import LocalBackend, RemoteBackend
from director_os.client.facade import ResilientDataAccess
from director_os.client.gateway import RemoteGateway
from director_os.client.local_store import LocalStore
from director_os.client.session import SessionManager
from director_os.client.storage import JsonFileStorage, KeyValueStorage
from director_os.config import ClientSettings

logger = logging.getLogger(__name__)


@dataclass
class ClientContext:
    settings: ClientSettings
    storage: KeyValueStorage
    store: LocalStore
    gateway: RemoteGateway
    data: ResilientDataAccess
    session: SessionManager


def build_client_context(
    settings: ClientSettings | None = None,
    storage: KeyValueStorage | None = None,
    session: requests.Session | None = None,
) -> ClientContext:
    """Assemble storage, local store, gateway, facade and session manager.

    Args:
        settings: defaults to ClientSettings.from_env().
        storage:  defaults to a JsonFileStorage at settings.store_path.
        session:  requests.Session handed to the gateway (tests inject fakes).
    """
    settings = settings or ClientSettings.from_env()
    storage = storage if storage is not None else JsonFileStorage(settings.store_path)

    store = LocalStore(storage)
    store.init()

    gateway = RemoteGateway(settings.api_base, session=session, timeout=settings.http_timeout)
    holder: dict = {}
    local = LocalBackend(store, user_provider=lambda: holder["session"].get_current_user())
    data = ResilientDataAccess(RemoteBackend(gateway), local, fallback_delay=settings.fallback_delay)
    session_manager = SessionManager(data, gateway, storage, store)
    holder["session"] = session_manager

    logger.debug("Client context ready api_base=%s store=%s", settings.api_base, settings.store_path)
    return ClientContext(
        settings=settings,
        storage=storage,
        store=store,
        gateway=gateway,
        data=data,
        session=session_manager,
    )
