"""Model name normalization, classification and base-model resolution."""

from .resolver import (
    BASE_MODEL_PREFIX,
    TUNED_MODEL_PREFIX,
    ModelKind,
    SourceKind,
    SourceRef,
    normalize,
    classify,
    make_model_name,
    tag_source,
    resolve_base_model_name,
)

__all__ = [
    "BASE_MODEL_PREFIX",
    "TUNED_MODEL_PREFIX",
    "ModelKind",
    "SourceKind",
    "SourceRef",
    "normalize",
    "classify",
    "make_model_name",
    "tag_source",
    "resolve_base_model_name",
]
