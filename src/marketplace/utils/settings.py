"""Application settings read from the ``[custom]`` table of ``domain.toml``.

``PROTEAN_ENV`` selects the overlay (``[test.custom]``, ``[production.custom]``).
"""

from marketplace.domain import marketplace

_DEFAULTS = {
    "identity_provider": "memory",
    "expose_error_details": False,
    "order_retry_attempts": 3,
    "estimated_delivery_days": 7,
}


def setting(name: str):
    custom = marketplace.config.get("custom") or {}
    if name in custom:
        return custom[name]
    return _DEFAULTS[name]
