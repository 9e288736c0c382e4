"""
View composition: merge cluster assignments, projected coordinates, and
user selections into the tables the charts and dialogs render.

Everything here is a pure function of its inputs.
"""

from numbers import Integral
from typing import Mapping, Optional, Sequence, Union

import pandas as pd

from cluster_lens.core.clustering import ClusterAssignment, ElbowCurve
from cluster_lens.errors import EmptySelection, InvalidParameter
import config


class _Selector:
    """Named sentinel for the non-numeric cluster selections."""

    def __init__(self, name: str, label: str):
        self.name = name
        self.label = label

    def __repr__(self) -> str:
        return self.name


NO_HIGHLIGHT = _Selector("NO_HIGHLIGHT", config.NO_HIGHLIGHT_LABEL)
ALL_CLUSTERS = _Selector("ALL_CLUSTERS", config.ALL_CLUSTERS_LABEL)

HighlightSelection = Union[int, _Selector, None]
DrilldownTarget = Union[int, _Selector, str]

VIEW_COLUMNS = ["word", "PC1", "PC2", "PC3", "cluster", "color", "opacity", "legend"]
TOP_WORDS_COLUMNS = ["word", "frequency", "cluster"]


def _labels(assignment: Union[ClusterAssignment, Mapping[str, int]]) -> dict[str, int]:
    if isinstance(assignment, ClusterAssignment):
        return assignment.labels
    return dict(assignment)


def palette_color(cluster_id: int, palette: Sequence[str] = config.CLUSTER_PALETTE) -> str:
    """Categorical color for a 1-based cluster id, cycling through the palette."""
    return palette[(cluster_id - 1) % len(palette)]


def is_no_highlight(selection: HighlightSelection) -> bool:
    return selection is None or selection is NO_HIGHLIGHT


def is_all_clusters(target: DrilldownTarget) -> bool:
    return target is ALL_CLUSTERS or target == config.ALL_CLUSTERS_LABEL


def is_cluster_id(value: object) -> bool:
    """True for integer ids; bools are rejected even though True == 1."""
    return isinstance(value, Integral) and not isinstance(value, bool)


def compose_elbow_annotation(curve: ElbowCurve, selected_k: int) -> pd.DataFrame:
    """
    Elbow curve with a marker flag on the selected K.

    Raises:
        InvalidParameter: If selected_k is not one of the curve's k values
    """
    df = curve.to_frame()
    if selected_k not in curve.ks:
        raise InvalidParameter(
            f"k={selected_k} is outside the elbow curve range {curve.ks[0]}..{curve.ks[-1]}"
            if len(curve) else f"k={selected_k} cannot be marked on an empty elbow curve"
        )
    df["selected"] = df["k"] == selected_k
    return df


def compose_scatter_view(
    points: pd.DataFrame,
    assignment: Union[ClusterAssignment, Mapping[str, int]],
    selected_cluster: HighlightSelection = NO_HIGHLIGHT,
    palette: Sequence[str] = config.CLUSTER_PALETTE,
    highlight_color: str = config.HIGHLIGHT_COLOR,
    dim_opacity: float = config.DIM_OPACITY,
    others_label: str = config.OTHERS_LABEL,
) -> pd.DataFrame:
    """
    Build one render record per projected word.

    Without a highlight every point gets its cluster's palette color at full
    opacity, labelled by cluster id. With a highlighted cluster C, C's points
    get ``highlight_color`` at full opacity labelled ``str(C)``; all other
    points keep their palette color, fade to ``dim_opacity`` and share the
    ``others_label`` legend entry.

    Args:
        points: DataFrame with columns word, PC1, PC2, PC3
        assignment: Word -> cluster id
        selected_cluster: Cluster id to spotlight, or NO_HIGHLIGHT / None
        palette: Categorical colors indexed by cluster id

    Returns:
        DataFrame with columns word, PC1, PC2, PC3, cluster, color, opacity, legend

    Raises:
        InvalidParameter: If the highlighted cluster id has no members
    """
    labels = _labels(assignment)
    df = points[["word", "PC1", "PC2", "PC3"]].copy()
    df["cluster"] = df["word"].map(labels)

    missing = df["cluster"].isna()
    if missing.any():
        raise InvalidParameter(
            f"{int(missing.sum())} projected words have no cluster assignment"
        )
    df["cluster"] = df["cluster"].astype(int)
    df["color"] = df["cluster"].map(lambda c: palette_color(c, palette))

    if is_no_highlight(selected_cluster):
        df["opacity"] = 1.0
        df["legend"] = df["cluster"].astype(str)
        return df[VIEW_COLUMNS]

    if not is_cluster_id(selected_cluster) or selected_cluster not in set(labels.values()):
        raise InvalidParameter(f"Cluster {selected_cluster} does not exist")

    is_selected = df["cluster"] == selected_cluster
    df.loc[is_selected, "color"] = highlight_color
    df["opacity"] = dim_opacity
    df.loc[is_selected, "opacity"] = 1.0
    df["legend"] = others_label
    df.loc[is_selected, "legend"] = str(selected_cluster)
    return df[VIEW_COLUMNS]


def compose_top_words(
    freq_table: Mapping[str, int],
    assignment: Union[ClusterAssignment, Mapping[str, int]],
    selected: DrilldownTarget = ALL_CLUSTERS,
    limit: Optional[int] = None,
) -> pd.DataFrame:
    """
    Words of one cluster (or all clusters) ranked by corpus frequency.

    Ties keep the frequency table's order. Words without a cluster
    assignment (e.g. below the embedding model's min_count) are skipped.

    Returns:
        DataFrame with columns word, frequency, cluster

    Raises:
        EmptySelection: If no word matches; ``rows`` holds the empty table
        InvalidParameter: If ``selected`` is neither ALL_CLUSTERS nor an integer id
    """
    labels = _labels(assignment)
    want_all = is_all_clusters(selected)
    if not want_all and not is_cluster_id(selected):
        raise InvalidParameter(f"Not a cluster id: {selected!r}")

    rows = [
        (word, int(freq), labels[word])
        for word, freq in freq_table.items()
        if word in labels and (want_all or labels[word] == selected)
    ]
    rows = sorted(rows, key=lambda row: -row[1])
    if limit is not None:
        rows = rows[:limit]

    df = pd.DataFrame(rows, columns=TOP_WORDS_COLUMNS)
    if df.empty:
        target = "any cluster" if want_all else f"cluster {selected}"
        raise EmptySelection(f"No words found for {target}", rows=df)
    return df


def compose_cluster_summary(
    assignment: ClusterAssignment,
    freq_table: Mapping[str, int],
) -> pd.DataFrame:
    """Size and most frequent word per cluster."""
    records = []
    for cid in assignment.cluster_ids:
        members = assignment.members(cid)
        top_word = max(members, key=lambda w: freq_table.get(w, 0)) if members else None
        records.append({"cluster": cid, "size": len(members), "top_word": top_word})
    return pd.DataFrame(records, columns=["cluster", "size", "top_word"])
