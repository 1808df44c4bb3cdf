"""Caller-owned, ordered collection of calculation rows."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, List, Tuple, TypeVar

InputT = TypeVar("InputT")
ResultT = TypeVar("ResultT")


class CalculationRows(Generic[InputT, ResultT]):
    """Ordered ``(input, result)`` pairs computed with a single engine function.

    Rows are replaced on recalculation, never mutated. When the engine raises,
    the collection is left as it was.
    """

    def __init__(self, engine: Callable[[InputT], ResultT]):
        self._engine = engine
        self._rows: List[Tuple[InputT, ResultT]] = []

    def add(self, inputs: InputT) -> ResultT:
        result = self._engine(inputs)
        self._rows.append((inputs, result))
        return result

    def recalculate(self, index: int, inputs: InputT) -> ResultT:
        self._check_index(index)
        result = self._engine(inputs)
        self._rows[index] = (inputs, result)
        return result

    def remove(self, index: int) -> Tuple[InputT, ResultT]:
        self._check_index(index)
        return self._rows.pop(index)

    @property
    def inputs(self) -> List[InputT]:
        return [inputs for inputs, _ in self._rows]

    @property
    def results(self) -> List[ResultT]:
        return [result for _, result in self._rows]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Tuple[InputT, ResultT]]:
        return iter(list(self._rows))

    def __getitem__(self, index: int) -> Tuple[InputT, ResultT]:
        return self._rows[index]

    def _check_index(self, index: int) -> None:
        if not -len(self._rows) <= index < len(self._rows):
            raise IndexError(f"No calculation row at index {index}.")
