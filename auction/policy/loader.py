"""
Load policy overlays from JSON files.
"""

import json
import logging
from pathlib import Path
from typing import Union

from .defaults import DEFAULT_POLICY
from .merge import merge_policy
from .schema import Policy, PolicyError


logger = logging.getLogger(__name__)


def load_policy(path: Union[str, Path], base: Policy = DEFAULT_POLICY) -> Policy:
    """
    Read a JSON overlay file and merge it onto base.

    Args:
        path: Path to a JSON file shaped like a partial Policy.to_dict()
        base: Policy the overlay is applied to

    Returns:
        Merged policy

    Raises:
        PolicyError: If the file is not valid JSON or not a JSON object
        OSError: If the file cannot be read
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            overlay = json.load(f)
        except json.JSONDecodeError as e:
            raise PolicyError(f"{path}: invalid JSON ({e})") from e

    if not isinstance(overlay, dict):
        raise PolicyError(f"{path}: policy overlay must be a JSON object")

    logger.info("Loaded policy overlay from %s", path)
    return merge_policy(base, overlay)
