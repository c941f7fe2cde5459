"""
Utilities: field masks and logging.
"""

from .field_mask import (
    FieldMask,
    flatten_update_paths,
    get_path,
    apply_update,
    apply_updates,
    field_mask,
    mask_from_paths,
)

__all__ = [
    "FieldMask",
    "flatten_update_paths",
    "get_path",
    "apply_update",
    "apply_updates",
    "field_mask",
    "mask_from_paths",
]
