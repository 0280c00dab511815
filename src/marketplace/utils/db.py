"""Schema management for relational database providers.

The memory provider needs no schema; for sqlite and postgresql every
aggregate and entity repository is touched so its SQLAlchemy model is
registered before tables are created or dropped.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

_RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    for provider in domain.providers.values():
        if provider.conn_info["provider"] in _RELATIONAL_PROVIDERS:
            yield provider


def _register_models(domain: Domain, provider) -> None:
    records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create tables for every element persisted in a relational provider."""
    with domain.domain_context():
        for provider in _relational_providers(domain):
            _register_models(domain, provider)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain) -> None:
    with domain.domain_context():
        for provider in _relational_providers(domain):
            _register_models(domain, provider)
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
