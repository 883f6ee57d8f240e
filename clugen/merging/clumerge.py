"""
clugen.merging.clumerge — Merge several datasets into one.

Typical use is combining several :func:`~clugen.generator.clugen` runs, or
mixing generated data with third-party data, while keeping cluster labels
from different sources apart.
"""
from __future__ import annotations
import logging
from collections import namedtuple
from typing import Any, Dict, List, Optional, Sequence, Union
import numpy as np
from clugen.config import CLUSTER_FIELDS, DEFAULT_CLUSTERS_FIELD, DEFAULT_FIELDS, OUTPUT_TYPES
from clugen.exceptions import ValidationError
from clugen.merging.accessors import FieldAccessor, as_accessor

logger = logging.getLogger(__name__)


def _field_list(fields: Sequence[str], clusters_field: Optional[str]) -> List[str]:
    if isinstance(fields, str): fields = (fields,)
    out = list(dict.fromkeys(fields))
    if clusters_field is not None and clusters_field not in out: out.append(clusters_field)
    if not out: raise ValidationError("At least one field must be merged")
    return out


def _ncols(value: np.ndarray) -> int:
    return 1 if value.ndim == 1 else int(np.prod(value.shape[1:]))


def _read_dataset(
    idx: int,
    acc: FieldAccessor,
    fields: List[str],
    clusters_field: Optional[str],
    cluster_fields: Sequence[str],
) -> Dict[str, np.ndarray]:
    values: Dict[str, np.ndarray] = {}
    numel: Optional[int] = None
    for field in fields:
        if not acc.has(field):
            raise ValidationError(f"Data item {idx} does not contain required field `{field}`")
        value = acc.get(field)
        if value.ndim == 0:
            raise ValidationError(f"Field `{field}` of data item {idx} must be an array, got a scalar")
        if field == clusters_field and not np.issubdtype(value.dtype, np.integer):
            raise ValidationError(f"`{clusters_field}` must contain integer types (data item {idx} has {value.dtype})")
        if field not in cluster_fields:
            if numel is None:
                numel = value.shape[0]
            elif value.shape[0] != numel:
                raise ValidationError(
                    f"Data item {idx} contains fields with different sizes ({value.shape[0]} != {numel})"
                )
        values[field] = value
    return values


def _relabel(labels: np.ndarray, offset: int) -> np.ndarray:
    # Distinct labels, in order of first appearance, become offset+1 .. offset+k
    _, first, inverse = np.unique(labels, return_index=True, return_inverse=True)
    rank = np.empty(first.size, dtype=np.int64)
    rank[np.argsort(first)] = np.arange(first.size)
    return rank[inverse.reshape(-1)] + offset + 1


def _num_cluster_rows(idx: int, values: Dict[str, np.ndarray], cluster_fields: Sequence[str]) -> Optional[int]:
    rows = {f: v.shape[0] for f, v in values.items() if f in cluster_fields}
    if not rows: return None
    counts = set(rows.values())
    if len(counts) > 1:
        raise ValidationError(f"Cluster-level fields of data item {idx} have different sizes ({rows})")
    return counts.pop()


def clumerge(
    *data: Any,
    fields: Sequence[str] = DEFAULT_FIELDS,
    clusters_field: Optional[str] = DEFAULT_CLUSTERS_FIELD,
    cluster_fields: Sequence[str] = CLUSTER_FIELDS,
    output: str = "dict",
) -> Union[Dict[str, np.ndarray], tuple]:
    """
    Merge the ``fields`` of one or more datasets.

    Point-indexed fields are concatenated row-wise in input order. The
    ``clusters_field`` of each dataset is relabeled so that clusters from
    different datasets never share an identifier: the distinct labels of
    dataset ``i``, in order of first appearance, become ``o_i + 1 .. o_i + k_i``,
    where ``o_i`` is the number of distinct labels in the datasets before it.

    Fields listed in ``cluster_fields`` (one row per cluster, e.g.
    ``centers``) are concatenated along the cluster axis. When any of them
    is merged, labels must be 1-based row indices into those fields and are
    shifted by the number of cluster rows before them instead, so merged
    labels keep indexing the merged cluster-level rows even when some
    clusters are empty.

    Parameters
    ----------
    *data
        Datasets: :class:`~clugen.generator.GenerationResult` instances,
        mappings, attribute records or eager dataframes (pandas, polars, ...).
    fields : sequence of str
        Fields to merge; ``clusters_field`` is added if missing.
    clusters_field : str or None
        Field holding integer cluster labels. With ``None`` nothing is
        relabeled and the output ``clusters`` field (replacing a merged one
        of that name) labels each row with the 1-based position of its
        source dataset.
    cluster_fields : sequence of str
        Names of cluster-indexed fields.
    output : {"dict", "namedtuple"}
        Container of the merged fields.

    Returns
    -------
    dict or MergedDataset namedtuple

    Example
    -------
    >>> from clugen import clugen, clumerge
    >>> a = clugen(2, 3, 50, [1, 0], 0.1, [10, 10], 5, 1, 0.5, rng=1)
    >>> b = clugen(2, 2, 30, [0, 1], 0.1, [10, 10], 5, 1, 0.5, rng=2)
    >>> m = clumerge(a, b)
    >>> m["points"].shape, sorted(set(m["clusters"].tolist()))
    ((80, 2), [1, 2, 3, 4, 5])
    """
    if not data: raise ValidationError("At least one data item is required")
    if output not in OUTPUT_TYPES:
        raise ValidationError(f"`output` must be one of {OUTPUT_TYPES}, got {output!r}")
    field_names = _field_list(fields, clusters_field)
    cluster_fields = tuple(cluster_fields)

    # Validate everything before building the output
    items: List[Dict[str, np.ndarray]] = []
    cluster_rows: List[Optional[int]] = []
    ncols: Dict[str, int] = {}
    for idx, dt in enumerate(data):
        values = _read_dataset(idx, as_accessor(dt), field_names, clusters_field, cluster_fields)
        for field, value in values.items():
            if field == clusters_field: continue
            if field not in ncols:
                ncols[field] = _ncols(value)
            elif _ncols(value) != ncols[field]:
                raise ValidationError(
                    f"Dimension mismatch in field `{field}` of data item {idx} "
                    f"({_ncols(value)} != {ncols[field]})"
                )
        nrows = _num_cluster_rows(idx, values, cluster_fields)
        if nrows is not None and clusters_field is not None:
            labels = values[clusters_field]
            if labels.size and (labels.min() < 1 or labels.max() > nrows):
                raise ValidationError(
                    f"Cluster labels of data item {idx} must be in 1..{nrows} to index its cluster-level fields"
                )
        items.append(values)
        cluster_rows.append(nrows)

    merged: Dict[str, np.ndarray] = {}
    for field in field_names:
        if field == clusters_field:
            parts, last_cluster = [], 0
            for values, nrows in zip(items, cluster_rows):
                labels = values[field].reshape(-1)
                if nrows is None:
                    parts.append(_relabel(labels, last_cluster))
                    last_cluster += int(np.unique(labels).size)
                else:
                    parts.append(labels.astype(np.int64) + last_cluster)
                    last_cluster += nrows
            merged[field] = np.concatenate(parts)
        else:
            first = items[0][field]
            tail = first.shape[1:]
            merged[field] = np.concatenate([values[field].reshape((-1,) + tail) for values in items])

    if clusters_field is None:
        point_field = next((f for f in field_names if f not in cluster_fields), None)
        if point_field is not None:
            counts = [values[point_field].shape[0] for values in items]
            merged[DEFAULT_CLUSTERS_FIELD] = np.repeat(np.arange(1, len(items) + 1, dtype=np.int64), counts)

    logger.debug(
        "Merged %d data items into %d fields (%s)",
        len(items), len(merged), ", ".join(f"{k}{tuple(v.shape)}" for k, v in merged.items()),
    )

    if output == "namedtuple":
        try:
            record = namedtuple("MergedDataset", list(merged.keys()))
        except ValueError as e:
            raise ValidationError(f"Field names cannot be used as attributes: {e}") from e
        return record(**merged)
    return merged


merge = clumerge
