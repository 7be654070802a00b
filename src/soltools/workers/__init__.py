"""Background workers.

Workers:
    - AsyncRuntime: persistent event loop thread owning the HTTP client
    - TransactionFetchWorker: paginated history fetch publishing to the UI
"""

from soltools.workers.fetch_worker import TransactionFetchWorker, fetch_history
from soltools.workers.runtime import AsyncRuntime

__all__ = [
    "AsyncRuntime",
    "TransactionFetchWorker",
    "fetch_history",
]
