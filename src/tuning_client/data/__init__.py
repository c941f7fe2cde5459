"""Training data encoding."""

from .encoding import (
    DEFAULT_INPUT_KEY,
    DEFAULT_OUTPUT_KEY,
    encode_tuning_data,
    load_training_file,
)

__all__ = [
    "DEFAULT_INPUT_KEY",
    "DEFAULT_OUTPUT_KEY",
    "encode_tuning_data",
    "load_training_file",
]
