"""Artisan Marketplace FastAPI application.

Processes commands synchronously inside each request. The identity provider
is chosen by the ``identity_provider`` setting and injected into the app.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay:
#   - "test"       -> in-memory stores, error details exposed
#   - "production" -> postgresql via DATABASE_URL, firebase identity provider
from marketplace.domain import marketplace

marketplace.init()

from marketplace.api.app import build_app  # noqa: E402
from marketplace.identity import build_identity_provider  # noqa: E402
from marketplace.utils.settings import setting  # noqa: E402

app = build_app(identity_provider=build_identity_provider(setting("identity_provider")))
