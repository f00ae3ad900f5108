"""
Catalog package for the Monastery360 API.

``store`` loads the monastery and event collections once, ``query``
answers lookups, filters, search and statistics over them, and
``router`` exposes those queries as read-only JSON endpoints under
``/api``.
"""

from .query import QueryEngine  # noqa: F401
from .router import router as catalog_router  # noqa: F401
from .store import CatalogStore  # noqa: F401
