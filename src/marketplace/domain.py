"""Marketplace bounded context: users, products, orders, reviews and notifications.

All aggregates live in one domain so that an order, the products it reserves
and the artisan counters it updates are persisted in a single Unit of Work.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

configure_logging(log_file_prefix="marketplace")

logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
