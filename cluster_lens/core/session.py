"""
Session state machine.

A session holds the user's selections (cluster count, highlight, drill-down
target). Each user event goes through ``recompute``, which returns the next
state plus the freshly composed outputs. The shared WordSpace is only read.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

import pandas as pd

from cluster_lens.core.clustering import ClusterAssignment
from cluster_lens.core.word_space import WordSpace
from cluster_lens.errors import DegenerateInput, EmptySelection, InvalidParameter
from cluster_lens.visualization.views import (
    ALL_CLUSTERS,
    NO_HIGHLIGHT,
    DrilldownTarget,
    HighlightSelection,
    compose_elbow_annotation,
    compose_scatter_view,
    compose_top_words,
    is_all_clusters,
    is_cluster_id,
    is_no_highlight,
)
import config

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    CLUSTER_COUNT_CHANGED = "cluster_count_changed"
    HIGHLIGHT_CHANGED = "highlight_changed"
    DRILLDOWN_REQUESTED = "drilldown_requested"
    DRILLDOWN_APPLIED = "drilldown_applied"


@dataclass(frozen=True)
class SessionState:
    """
    Per-session selections.

    ``phase`` is where the session rests between events: IDLE, or
    DRILLDOWN_REQUESTED while the drill-down parameters are being chosen.
    """
    k: int = config.DEFAULT_CLUSTER_COUNT
    highlight: HighlightSelection = NO_HIGHLIGHT
    drilldown_target: DrilldownTarget = ALL_CLUSTERS
    phase: Phase = Phase.IDLE


# Events ----------------------------------------------------------------------

@dataclass(frozen=True)
class ChangeClusterCount:
    k: int


@dataclass(frozen=True)
class ChangeHighlight:
    cluster: HighlightSelection


@dataclass(frozen=True)
class RequestDrilldown:
    pass


@dataclass(frozen=True)
class DismissDrilldown:
    pass


@dataclass(frozen=True)
class ApplyDrilldown:
    target: DrilldownTarget


Event = Union[
    ChangeClusterCount, ChangeHighlight, RequestDrilldown, DismissDrilldown, ApplyDrilldown
]


@dataclass
class SessionOutputs:
    """
    Everything the presentation layer renders after one event.

    ``error`` reports a rejected request (the previous view is kept);
    ``render_error`` means the scatter could not be drawn at all.
    """
    transition: Phase = Phase.IDLE
    assignment: Optional[ClusterAssignment] = None
    elbow: Optional[pd.DataFrame] = None
    scatter: Optional[pd.DataFrame] = None
    top_words: Optional[pd.DataFrame] = None
    error: Optional[str] = None
    render_error: Optional[str] = None
    notices: list[str] = field(default_factory=list)


def _compose_elbow(space: WordSpace, k: int) -> pd.DataFrame:
    curve = space.ensure_elbow_curve()
    try:
        return compose_elbow_annotation(curve, k)
    except InvalidParameter:
        # K beyond the curve's range (few distinct vectors): show it unmarked
        df = curve.to_frame()
        df["selected"] = False
        return df


def _compose_scatter(
    space: WordSpace,
    assignment: ClusterAssignment,
    highlight: HighlightSelection,
    outputs: SessionOutputs,
) -> None:
    try:
        points = space.ensure_projection()
    except DegenerateInput as e:
        logger.warning(f"Cannot render scatter: {e}")
        outputs.scatter = None
        outputs.render_error = f"Cannot render: {e}"
        return
    outputs.scatter = compose_scatter_view(points, assignment, highlight)
    outputs.render_error = None


def render(state: SessionState, space: WordSpace) -> SessionOutputs:
    """
    Compose every output for a state from scratch.

    Raises:
        InvalidParameter: If state.k cannot be clustered
    """
    assignment = space.clusterer.cluster(space.matrix, state.k)
    outputs = SessionOutputs(transition=Phase.CLUSTER_COUNT_CHANGED, assignment=assignment)
    outputs.elbow = _compose_elbow(space, state.k)
    highlight = state.highlight
    if not is_no_highlight(highlight) and not _is_member(highlight, assignment):
        highlight = NO_HIGHLIGHT
    _compose_scatter(space, assignment, highlight, outputs)
    return outputs


def _is_member(cluster: object, assignment: ClusterAssignment) -> bool:
    return is_cluster_id(cluster) and cluster in assignment.cluster_ids


def _rejected(state: SessionState, previous: Optional[SessionOutputs], message: str):
    logger.info(f"Rejected request: {message}")
    outputs = replace(previous) if previous is not None else SessionOutputs()
    outputs.error = message
    outputs.notices = []
    return state, outputs


def recompute(
    state: SessionState,
    event: Event,
    space: WordSpace,
    previous: Optional[SessionOutputs] = None,
) -> tuple[SessionState, SessionOutputs]:
    """
    Apply one user event.

    Args:
        state: Current session state
        event: The user's action
        space: Shared, initialized WordSpace
        previous: Outputs of the previous cycle; reused where the event
            does not invalidate them (e.g. the assignment on a highlight change)

    Returns:
        (next state, outputs). Invalid requests return the unchanged state
        and the previous outputs with ``error`` set.
    """
    if isinstance(event, ChangeClusterCount):
        new_state = replace(state, k=event.k, highlight=NO_HIGHLIGHT, phase=Phase.IDLE)
        try:
            outputs = render(new_state, space)
        except InvalidParameter as e:
            return _rejected(state, previous, str(e))
        return new_state, outputs

    if isinstance(event, DismissDrilldown):
        new_state = replace(state, phase=Phase.IDLE)
        outputs = replace(previous) if previous is not None else SessionOutputs()
        outputs.transition = Phase.IDLE
        outputs.error = None
        outputs.notices = []
        return new_state, outputs

    if previous is None or previous.assignment is None or previous.assignment.k != state.k:
        try:
            previous = render(state, space)
        except InvalidParameter as e:
            return _rejected(state, previous, str(e))

    assignment = previous.assignment

    if isinstance(event, ChangeHighlight):
        cluster = event.cluster
        if not is_no_highlight(cluster) and not _is_member(cluster, assignment):
            return _rejected(state, previous, f"Cluster {cluster} does not exist for k={state.k}")
        new_state = replace(state, highlight=NO_HIGHLIGHT if cluster is None else cluster)
        outputs = replace(previous, transition=Phase.HIGHLIGHT_CHANGED, error=None, notices=[])
        _compose_scatter(space, assignment, new_state.highlight, outputs)
        return new_state, outputs

    if isinstance(event, RequestDrilldown):
        new_state = replace(state, phase=Phase.DRILLDOWN_REQUESTED)
        outputs = replace(previous, transition=Phase.DRILLDOWN_REQUESTED, error=None, notices=[])
        return new_state, outputs

    if isinstance(event, ApplyDrilldown):
        target = ALL_CLUSTERS if is_all_clusters(event.target) else event.target
        if target is not ALL_CLUSTERS and not _is_member(target, assignment):
            return _rejected(state, previous, f"Cluster {target} does not exist for k={state.k}")

        outputs = replace(previous, transition=Phase.DRILLDOWN_APPLIED, error=None, notices=[])
        try:
            outputs.top_words = compose_top_words(
                space.word_freq, assignment, target, limit=config.TOP_WORDS_LIMIT
            )
        except EmptySelection as e:
            outputs.top_words = e.rows
            outputs.notices = [str(e)]
        new_state = replace(state, drilldown_target=target, phase=Phase.IDLE)
        return new_state, outputs

    raise TypeError(f"Unknown session event: {event!r}")
