"""Call-site transform for ``transformTypeToKeys<T>()``."""

from .lib import KEYS_HELPER, PRODUCTION_OPTION, allowed_in_production, transform_type_keys

__all__ = ["KEYS_HELPER", "PRODUCTION_OPTION", "allowed_in_production", "transform_type_keys"]
