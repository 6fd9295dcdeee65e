"""HTTP utilities package.

Exposes pooled httpx async clients.
"""

from .client import close_all_clients, get_httpx_client, pooled_client_count

__all__ = ["get_httpx_client", "close_all_clients", "pooled_client_count"]
