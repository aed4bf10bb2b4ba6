"""Read student events from JSON or CSV export files"""

import csv
import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from time_on_task.models.student_event import StudentEvent
from time_on_task.services.errors import EventLoadError

logger = logging.getLogger(__name__)

def _parse_item(item: dict, index: int) -> StudentEvent:
    if not isinstance(item, dict):
        raise EventLoadError(f"Item {index}: expected an object")
    # Blank CSV cells mean "not recorded"
    cleaned = {key: value for key, value in item.items() if value not in ("", None)}
    try:
        return StudentEvent(**cleaned)
    except ValidationError as exc:
        raise EventLoadError(f"Item {index}: {exc.errors()[0]['msg']}") from exc

def parse_json(file_path: Union[str, Path]) -> List[StudentEvent]:
    """Parse a JSON array of event objects"""
    try:
        with open(file_path, encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise EventLoadError(f"Malformed JSON in {file_path}: {exc}") from exc

    if not isinstance(payload, list):
        raise EventLoadError("JSON payload must be a list of objects")

    return [_parse_item(item, i) for i, item in enumerate(payload, start=1)]

def parse_csv(file_path: Union[str, Path]) -> List[StudentEvent]:
    """Parse a CSV file with a header row of event columns"""
    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []
        return [_parse_item(row, row_number) for row_number, row in enumerate(reader, start=2)]

def load_events(file_path: Union[str, Path]) -> List[StudentEvent]:
    """Load events from a .json or .csv file, keeping file order"""
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        events = parse_json(path)
    elif suffix == ".csv":
        events = parse_csv(path)
    else:
        raise EventLoadError(f"Unsupported event file type: {suffix or path.name}")
    logger.info(f"Loaded {len(events)} events from {path}")
    return events
