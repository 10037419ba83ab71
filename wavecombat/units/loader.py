"""
Loading of unit definitions from JSON files.
"""

import json
from pathlib import Path

from catchery import log_error, log_warning
from pydantic import ValidationError

from .unit_definition import UnitDefinition


def load_units(file_path: Path) -> dict[str, UnitDefinition]:
    """
    Loads unit definitions from a JSON file holding a list of records.

    Invalid records are reported and skipped.

    Args:
        file_path (Path):
            The path to the JSON file containing unit data.

    Returns:
        dict[str, UnitDefinition]: A dictionary mapping unit names to definitions.

    """
    units: dict[str, UnitDefinition] = {}
    try:
        with open(file_path) as f:
            records = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        log_error(
            f"Failed to load units from {file_path}: {e}",
            {
                "file_path": str(file_path),
                "context": "unit_file_loading",
            },
        )
        return units

    if not isinstance(records, list):
        log_error(
            f"Unit data in {file_path} is not a list.",
            {
                "file_path": str(file_path),
                "error": "Invalid format",
                "context": "unit_file_loading",
            },
        )
        return units

    for record in records:
        try:
            unit = UnitDefinition.model_validate(record)
        except ValidationError as e:
            log_warning(
                f"Skipping invalid unit record in {file_path}.",
                {"record": record, "context": "unit_file_loading"},
                e,
            )
            continue
        units[unit.name] = unit
    return units
