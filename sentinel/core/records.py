from collections.abc import Mapping


def read_field(record, name, default=None):
    """Read ``name`` from a mapping row, an ORM object or a pydantic model."""
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def read_path(record, path, default=None):
    """Follow a dotted path such as ``organization.name``; missing links yield ``default``."""
    value = record
    for part in path.split("."):
        if value is None:
            return default
        value = read_field(value, part)
    return default if value is None else value
