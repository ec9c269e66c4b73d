"""
==============================================================================
API v1 Endpoints
==============================================================================

Routers:
--------
- health: Health check endpoints
- products: Product catalog CRUD
- folders: Folder CRUD and folder-scoped scans
- scan: Free-standing scan, last-scan polling, lookup
- stream: Live scan stream (Server-Sent Events)

==============================================================================
"""

from . import health, products, folders, scan, stream

__all__ = ["health", "products", "folders", "scan", "stream"]
