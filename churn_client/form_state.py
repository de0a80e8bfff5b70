from typing import Callable, List, Sequence, Tuple

from .features import FEATURE_SCHEMA, FeatureSchema

FormValues = Tuple[str, ...]
FormListener = Callable[[FormValues], None]


class InvalidIndex(IndexError):
    """
    A field index outside the schema was used.
    """


class FormState:
    """
    Raw string values of the form, one per schema field.

    Every change swaps in a new tuple, so a snapshot taken earlier (for
    example by the history log) never sees later edits. Listeners are called
    with the new values after each change.
    """

    def __init__(self, schema: FeatureSchema = FEATURE_SCHEMA):
        self.schema = schema
        self._values: FormValues = ("",) * len(schema)
        self._listeners: List[FormListener] = []

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> str:
        return self._values[index]

    @property
    def values(self) -> FormValues:
        return self._values

    def snapshot(self) -> FormValues:
        return self._values

    def subscribe(self, listener: FormListener) -> None:
        self._listeners.append(listener)

    def _replace(self, values: FormValues) -> None:
        self._values = values
        for listener in list(self._listeners):
            listener(values)

    def set_field(self, index: int, value: str) -> None:
        if not 0 <= index < len(self.schema):
            raise InvalidIndex(f"Field index {index} out of range for {len(self.schema)} fields")
        updated = list(self._values)
        updated[index] = value
        self._replace(tuple(updated))

    def reset(self) -> None:
        self._replace(("",) * len(self.schema))

    def prefill(self, example: Sequence[str]) -> None:
        """
        Replace every value with the given example. Only the length is checked.
        """
        if len(example) != len(self.schema):
            raise ValueError(f"Example has {len(example)} values, schema has {len(self.schema)} fields")
        self._replace(tuple(example))
