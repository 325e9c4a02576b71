"""
Director OS client data layer.

Remote REST gateway, persisted local store, the resilient facade that falls
back from one to the other, and the session manager on top.
"""

from director_os.client.context import ClientContext, build_client_context
from director_os.client.exceptions import LocalStoreError, RemoteUnavailableError

__all__ = [
    "ClientContext",
    "LocalStoreError",
    "RemoteUnavailableError",
    "build_client_context",
]
