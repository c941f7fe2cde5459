"""
Training data encoding.

Training data arrives in many shapes (records, pairs, column mappings,
DataFrames, files on disk) and is encoded into a ``Dataset`` of
``TuningExample`` pairs before it is sent to the service.
"""

import csv
import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Dict, List, Union
import logging

import pandas as pd

from ..core.exceptions import TrainingDataError
from ..resources import Dataset, TuningExample

logger = logging.getLogger(__name__)

DEFAULT_INPUT_KEY = "text_input"
DEFAULT_OUTPUT_KEY = "output"

SUPPORTED_SUFFIXES = (".json", ".jsonl", ".csv")


def encode_tuning_data(training_data: Any,
                       input_key: str = DEFAULT_INPUT_KEY,
                       output_key: str = DEFAULT_OUTPUT_KEY) -> Dataset:
    """
    Encode training data into the service's pair format.

    Args:
        training_data: A ``Dataset``, a file path, a ``pandas.DataFrame``,
            a column mapping ``{input_key: [...], output_key: [...]}`` or an
            iterable of records, ``(input, output)`` pairs or
            ``TuningExample`` objects
        input_key: Name of the input field in each record
        output_key: Name of the output field in each record

    Returns:
        Encoded dataset

    Raises:
        TrainingDataError: If a record is malformed or the data is empty
    """
    if input_key == output_key:
        raise TrainingDataError(f"input_key and output_key must differ, both are {input_key!r}")

    if isinstance(training_data, Dataset):
        dataset = training_data
    elif isinstance(training_data, (str, Path)):
        return encode_tuning_data(load_training_file(Path(training_data)), input_key, output_key)
    elif isinstance(training_data, pd.DataFrame):
        dataset = _encode_records(training_data.to_dict(orient="records"), input_key, output_key)
    elif isinstance(training_data, Mapping):
        dataset = _encode_columns(training_data, input_key, output_key)
    elif isinstance(training_data, Iterable):
        dataset = _encode_records(training_data, input_key, output_key)
    else:
        raise TrainingDataError(
            f"Unsupported training data type: {type(training_data).__name__}",
            record=training_data,
        )

    if not dataset.examples:
        raise TrainingDataError("Training data is empty")

    logger.debug(f"Encoded {len(dataset)} training examples")
    return dataset


def _encode_records(records: Iterable, input_key: str, output_key: str) -> Dataset:
    examples = [
        _encode_record(record, index, input_key, output_key)
        for index, record in enumerate(records)
    ]
    return Dataset(examples=examples)


def _encode_record(record: Any, index: int, input_key: str, output_key: str) -> TuningExample:
    if isinstance(record, TuningExample):
        return record

    if isinstance(record, Mapping):
        keys = set(record)
        expected = {input_key, output_key}
        missing = expected - keys
        extra = keys - expected
        if missing or extra:
            raise TrainingDataError(
                f"Training record {index} must have exactly the keys {sorted(expected)}; "
                f"missing: {sorted(missing)}, unexpected: {sorted(map(str, extra))}",
                record=record,
                index=index,
            )
        return TuningExample(text_input=str(record[input_key]), output=str(record[output_key]))

    if isinstance(record, (tuple, list)):
        if len(record) != 2:
            raise TrainingDataError(
                f"Training record {index} must be an (input, output) pair, got {len(record)} items",
                record=record,
                index=index,
            )
        return TuningExample(text_input=str(record[0]), output=str(record[1]))

    raise TrainingDataError(
        f"Training record {index} has unsupported type {type(record).__name__}",
        record=record,
        index=index,
    )


def _encode_columns(columns: Mapping, input_key: str, output_key: str) -> Dataset:
    if set(columns) != {input_key, output_key}:
        raise TrainingDataError(
            f"Column mapping must have exactly the keys {sorted([input_key, output_key])}, "
            f"got: {sorted(map(str, columns))}",
            record=dict(columns),
        )
    for key in (input_key, output_key):
        column = columns[key]
        if isinstance(column, (str, bytes)) or not isinstance(column, Iterable):
            raise TrainingDataError(
                f"Column {key!r} must be a list of values, got {type(column).__name__}; "
                f"wrap a single record in a list: [{{{input_key!r}: ..., {output_key!r}: ...}}]",
                record=dict(columns),
            )
    inputs = list(columns[input_key])
    outputs = list(columns[output_key])
    if len(inputs) != len(outputs):
        raise TrainingDataError(
            f"Column lengths differ: {len(inputs)} inputs, {len(outputs)} outputs"
        )
    return Dataset(examples=[
        TuningExample(text_input=str(i), output=str(o)) for i, o in zip(inputs, outputs)
    ])


def load_training_file(file_path: Path) -> Union[List[Dict[str, Any]], Dict[str, List[Any]]]:
    """
    Load raw training records from a JSON, JSONL or CSV file.

    A ``.json`` file may hold either a list of records or a column mapping.
    """
    if not file_path.exists():
        raise TrainingDataError(f"Training data file not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise TrainingDataError(
            f"Unsupported training data file format: {suffix or file_path.name} "
            f"(expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )

    try:
        with open(file_path, 'r', encoding='utf-8', newline='') as f:
            if suffix == '.csv':
                return list(csv.DictReader(f))
            if suffix == '.jsonl':
                return [json.loads(line) for line in f if line.strip()]
            return json.load(f)
    except (json.JSONDecodeError, csv.Error, UnicodeDecodeError) as e:
        raise TrainingDataError(f"Failed to parse training data file {file_path}: {e}", cause=e)
