from collections import deque
from typing import Deque, Iterator, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict

from .encoder import Number
from .features import FEATURE_SCHEMA, FeatureSchema, get_feature_names
from .form_state import FormValues
from .io_schemas import label_for


class HistoryEntry(BaseModel):
    """
    One submitted form and the prediction it received.
    """
    model_config = ConfigDict(frozen=True)

    input: FormValues
    output: Number

    @property
    def label(self) -> str:
        return label_for(self.output).value


class HistoryLog:
    """
    Submitted forms and their predictions, newest first.

    Unbounded unless `max_entries` is given, in which case the oldest entries
    are dropped once the cap is reached.
    """

    def __init__(self, max_entries: Optional[int] = None):
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self._entries: Deque[HistoryEntry] = deque(maxlen=max_entries)

    def record(self, entry: HistoryEntry) -> None:
        self._entries.appendleft(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]

    @property
    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[0] if self._entries else None

    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def to_frame(self, schema: FeatureSchema = FEATURE_SCHEMA) -> pd.DataFrame:
        """
        Return the history as a DataFrame, one row per entry, newest first.
        """
        columns = get_feature_names(schema)
        records = []
        for entry in self._entries:
            row = dict(zip(columns, entry.input))
            row["prediction"] = entry.output
            row["label"] = entry.label
            records.append(row)
        return pd.DataFrame.from_records(records, columns=[*columns, "prediction", "label"])
