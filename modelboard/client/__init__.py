from .errors import ModelStoreError, FetchFailed, SubmitFailed, DeleteFailed
from .http_client import ModelStoreHttpClient
from .store import RemoteModelStore, create_store

__all__ = [
    "ModelStoreError",
    "FetchFailed",
    "SubmitFailed",
    "DeleteFailed",
    "ModelStoreHttpClient",
    "RemoteModelStore",
    "create_store",
]
