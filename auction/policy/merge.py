"""
Policy overlay merge.

Overlays are partial nested mappings. Mapping values merge key by key,
scalars and sequences replace the base value wholesale, and absent keys keep
the base value at every depth. An explicit None is assigned like any other
scalar, which is how an overlay switches off an optional section such as
"competitor". Neither argument is mutated.
"""

import copy
import logging
from typing import Any, Mapping

from .schema import Policy


logger = logging.getLogger(__name__)


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict:
    """
    Recursively overlay overrides onto base.

    Args:
        base: Base mapping
        overrides: Partial mapping to apply

    Returns:
        A new dictionary; inputs are left untouched
    """
    result = {key: copy.deepcopy(value) for key, value in base.items()}

    for key, value in overrides.items():
        current = result.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def merge_policy(base: Policy, overrides: Mapping[str, Any]) -> Policy:
    """
    Apply a partial overlay to a policy.

    Args:
        base: Policy to start from
        overrides: Partial policy mapping (same shape as Policy.to_dict())

    Returns:
        New Policy with the overlay applied

    Raises:
        PolicyError: If the overlay introduces unknown keys or bad values
    """
    if not overrides:
        return base
    merged = deep_merge(base.to_dict(), overrides)
    logger.debug("Merged policy overlay sections: %s", sorted(overrides))
    return Policy.from_dict(merged)
