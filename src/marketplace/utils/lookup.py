from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain


def load(aggregate_cls, identifier, error_cls, message=None):
    """Fetch an aggregate by id, translating a miss into a marketplace error."""
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError as exc:
        raise error_cls(message or f"{aggregate_cls.__name__} does not exist") from exc
