"""
clugen.merging.accessors — Read-only, representation-agnostic field access.

Datasets handed to the merger may be mappings, attribute records (such as
:class:`~clugen.generator.GenerationResult` or a namedtuple) or dataframes
understood by narwhals. Each is wrapped in a :class:`FieldAccessor` so the
merge logic never needs to know which one it is reading.
"""
from __future__ import annotations
import re
from collections.abc import Mapping
from typing import Any, List, Protocol, runtime_checkable
import narwhals as nw
import numpy as np


@runtime_checkable
class FieldAccessor(Protocol):
    def has(self, name: str) -> bool: ...
    def get(self, name: str) -> np.ndarray: ...


class MappingAccessor:
    def __init__(self, data: Mapping):
        self._data = data

    def has(self, name: str) -> bool: return name in self._data
    def get(self, name: str) -> np.ndarray: return np.asarray(self._data[name])
    def __repr__(self) -> str: return f"MappingAccessor(keys={list(self._data.keys())!r})"


class AttributeAccessor:
    def __init__(self, data: Any):
        self._data = data

    def has(self, name: str) -> bool: return hasattr(self._data, name)
    def get(self, name: str) -> np.ndarray: return np.asarray(getattr(self._data, name))
    def __repr__(self) -> str: return f"AttributeAccessor({type(self._data).__name__})"


class FrameAccessor:
    """
    Fields of an eager dataframe (pandas, polars, pyarrow...).

    A field is either a single column with that name, returned as a 1D
    array, or the columns ``<name>_0 .. <name>_{m-1}``, stacked into an
    ``(n, m)`` matrix. This is the layout produced by
    :meth:`GenerationResult.to_pandas`.
    """

    def __init__(self, frame: nw.DataFrame):
        self._frame = frame

    def _component_columns(self, name: str) -> List[str]:
        pattern = re.compile(rf"^{re.escape(name)}_(\d+)$")
        matches = []
        for c in self._frame.columns:
            m = pattern.match(c)
            if m: matches.append((int(m.group(1)), c))
        return [c for _, c in sorted(matches)]

    def has(self, name: str) -> bool:
        return name in self._frame.columns or bool(self._component_columns(name))

    def get(self, name: str) -> np.ndarray:
        if name in self._frame.columns: return self._frame.get_column(name).to_numpy()
        cols = self._component_columns(name)
        if not cols: raise KeyError(name)
        return np.column_stack([self._frame.get_column(c).to_numpy() for c in cols])

    def __repr__(self) -> str: return f"FrameAccessor(columns={self._frame.columns!r})"


def as_accessor(data: Any) -> FieldAccessor:
    if isinstance(data, (MappingAccessor, AttributeAccessor, FrameAccessor)): return data
    if isinstance(data, Mapping): return MappingAccessor(data)
    frame = nw.from_native(data, eager_only=True, pass_through=True)
    if isinstance(frame, nw.DataFrame): return FrameAccessor(frame)
    return AttributeAccessor(data)
