import importlib

from sentinel.models.asset import Asset
from sentinel.models.organization import Organization
from sentinel.models.risk import Risk


def import_all_models() -> None:
    for module_name in (
        "sentinel.models.asset",
        "sentinel.models.organization",
        "sentinel.models.risk",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Asset",
    "Organization",
    "Risk",
    "import_all_models",
]
