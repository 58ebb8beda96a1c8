"""Call-site transform for ``transformTypeToPropTypes<T>(component)``."""

from .lib import PROP_TYPES_HELPER, transform_component_calls

__all__ = ["PROP_TYPES_HELPER", "transform_component_calls"]
