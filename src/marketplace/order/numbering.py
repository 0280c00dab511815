import secrets
import string
from datetime import UTC, datetime

_ALPHABET = string.digits + string.ascii_uppercase


def generate_order_number(now: datetime | None = None) -> str:
    """Human-facing order number: ``ORD-<epoch millis>-<9 base36 chars>``."""
    moment = now or datetime.now(UTC)
    millis = int(moment.timestamp() * 1000)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
    return f"ORD-{millis}-{suffix}"
