import pytest

from cluster_lens.core.corpus import WordFrequencyTable
from cluster_lens.core.matrix import EmbeddingMatrix
from cluster_lens.core.session import (
    ApplyDrilldown,
    ChangeClusterCount,
    ChangeHighlight,
    DismissDrilldown,
    Phase,
    RequestDrilldown,
    SessionState,
    recompute,
    render,
)
from cluster_lens.core.word_space import WordSpace
from cluster_lens.visualization.views import ALL_CLUSTERS, NO_HIGHLIGHT
import config


@pytest.fixture
def state():
    return SessionState(k=3)


@pytest.fixture
def rendered(state, blob_space):
    return render(state, blob_space)


@pytest.mark.unit
def test_initial_render(rendered, blob_space):
    assert rendered.assignment.k == 3
    assert rendered.scatter is not None
    assert len(rendered.scatter) == blob_space.n_words
    assert (rendered.scatter["opacity"] == 1.0).all()
    assert rendered.elbow["selected"].sum() == 1
    assert int(rendered.elbow.loc[rendered.elbow["selected"], "k"].iloc[0]) == 3
    assert rendered.error is None
    assert rendered.render_error is None


@pytest.mark.unit
def test_change_cluster_count(state, rendered, blob_space):
    new_state, outputs = recompute(state, ChangeClusterCount(5), blob_space, rendered)
    assert new_state.k == 5
    assert new_state.phase == Phase.IDLE
    assert outputs.transition == Phase.CLUSTER_COUNT_CHANGED
    assert outputs.assignment.k == 5
    assert set(outputs.scatter["legend"]) == {"1", "2", "3", "4", "5"}
    assert int(outputs.elbow.loc[outputs.elbow["selected"], "k"].iloc[0]) == 5


@pytest.mark.unit
def test_change_cluster_count_clears_highlight(state, rendered, blob_space):
    highlighted, outputs = recompute(state, ChangeHighlight(2), blob_space, rendered)
    assert highlighted.highlight == 2
    new_state, outputs = recompute(highlighted, ChangeClusterCount(4), blob_space, outputs)
    assert new_state.highlight is NO_HIGHLIGHT
    assert (outputs.scatter["opacity"] == 1.0).all()


@pytest.mark.unit
def test_invalid_cluster_count_keeps_previous_view(state, rendered, blob_space):
    new_state, outputs = recompute(state, ChangeClusterCount(0), blob_space, rendered)
    assert new_state == state
    assert outputs.error
    assert outputs.assignment is rendered.assignment
    assert outputs.scatter is rendered.scatter


@pytest.mark.unit
def test_cluster_count_above_vocabulary_rejected(state, rendered, blob_space):
    new_state, outputs = recompute(state, ChangeClusterCount(blob_space.n_words + 1), blob_space, rendered)
    assert new_state.k == 3
    assert outputs.error


@pytest.mark.unit
def test_highlight_reuses_assignment(state, rendered, blob_space):
    new_state, outputs = recompute(state, ChangeHighlight(1), blob_space, rendered)
    assert new_state.highlight == 1
    assert outputs.transition == Phase.HIGHLIGHT_CHANGED
    assert outputs.assignment is rendered.assignment
    assert set(outputs.scatter["legend"]) == {"1", config.OTHERS_LABEL}
    assert rendered.scatter["opacity"].eq(1.0).all()


@pytest.mark.unit
def test_clear_highlight(state, rendered, blob_space):
    highlighted, outputs = recompute(state, ChangeHighlight(1), blob_space, rendered)
    cleared, outputs = recompute(highlighted, ChangeHighlight(None), blob_space, outputs)
    assert cleared.highlight is NO_HIGHLIGHT
    assert (outputs.scatter["opacity"] == 1.0).all()


@pytest.mark.unit
def test_invalid_highlight_rejected(state, rendered, blob_space):
    new_state, outputs = recompute(state, ChangeHighlight(9), blob_space, rendered)
    assert new_state == state
    assert "9" in outputs.error
    assert outputs.scatter is rendered.scatter


@pytest.mark.unit
def test_drilldown_request_then_apply(state, rendered, blob_space):
    requested, outputs = recompute(state, RequestDrilldown(), blob_space, rendered)
    assert requested.phase == Phase.DRILLDOWN_REQUESTED
    assert outputs.transition == Phase.DRILLDOWN_REQUESTED
    assert outputs.top_words is None

    applied, outputs = recompute(requested, ApplyDrilldown(2), blob_space, outputs)
    assert applied.phase == Phase.IDLE
    assert applied.drilldown_target == 2
    assert outputs.transition == Phase.DRILLDOWN_APPLIED
    assert not outputs.top_words.empty
    assert set(outputs.top_words["cluster"]) == {2}
    freqs = list(outputs.top_words["frequency"])
    assert freqs == sorted(freqs, reverse=True)


@pytest.mark.unit
def test_drilldown_all_clusters(state, rendered, blob_space):
    applied, outputs = recompute(state, ApplyDrilldown("All"), blob_space, rendered)
    assert applied.drilldown_target is ALL_CLUSTERS
    assert len(outputs.top_words) == blob_space.n_words
    # w04 and w05 share a frequency; table order breaks the tie
    words = list(outputs.top_words["word"])
    assert words.index("w04") < words.index("w05")


@pytest.mark.unit
def test_drilldown_unknown_cluster_rejected(state, rendered, blob_space):
    requested, outputs = recompute(state, RequestDrilldown(), blob_space, rendered)
    new_state, outputs = recompute(requested, ApplyDrilldown(8), blob_space, outputs)
    assert new_state == requested
    assert outputs.error


@pytest.mark.unit
def test_drilldown_with_no_frequencies_is_empty_not_error(blob_matrix, clusterer):
    space = WordSpace.from_parts(blob_matrix, WordFrequencyTable({}), clusterer=clusterer)
    state = SessionState(k=2)
    new_state, outputs = recompute(state, ApplyDrilldown(1), space)
    assert outputs.error is None
    assert outputs.top_words.empty
    assert outputs.notices
    assert new_state.phase == Phase.IDLE


@pytest.mark.unit
def test_degenerate_projection_reported(two_pairs_matrix, clusterer):
    freq = WordFrequencyTable({w: 1 for w in two_pairs_matrix.words})
    space = WordSpace.from_parts(two_pairs_matrix, freq, clusterer=clusterer)
    outputs = render(SessionState(k=2), space)
    assert outputs.assignment.k == 2
    assert outputs.scatter is None
    assert outputs.render_error.startswith("Cannot render")
    assert outputs.elbow is not None


@pytest.mark.unit
def test_recompute_without_previous_outputs(state, blob_space):
    new_state, outputs = recompute(state, ChangeHighlight(3), blob_space)
    assert new_state.highlight == 3
    assert outputs.assignment.k == 3


@pytest.mark.unit
def test_unknown_event(state, rendered, blob_space):
    with pytest.raises(TypeError):
        recompute(state, object(), blob_space, rendered)


@pytest.mark.unit
def test_state_is_not_mutated(state, rendered, blob_space):
    before = SessionState(k=state.k)
    recompute(state, ChangeHighlight(1), blob_space, rendered)
    recompute(state, RequestDrilldown(), blob_space, rendered)
    assert state == before


@pytest.mark.unit
def test_shared_space_serves_independent_sessions(blob_space):
    s1, s2 = SessionState(k=2), SessionState(k=4)
    _, out1 = recompute(s1, ChangeHighlight(1), blob_space)
    _, out2 = recompute(s2, ChangeHighlight(4), blob_space)
    assert out1.assignment.k == 2
    assert out2.assignment.k == 4
    assert not blob_space.matrix.vectors.flags.writeable


@pytest.mark.unit
def test_dismissed_drilldown_stays_closed(state, rendered, blob_space):
    requested, outputs = recompute(state, RequestDrilldown(), blob_space, rendered)
    dismissed, outputs = recompute(requested, DismissDrilldown(), blob_space, outputs)
    assert dismissed.phase == Phase.IDLE
    assert outputs.top_words is None
    assert outputs.error is None

    highlighted, _ = recompute(dismissed, ChangeHighlight(2), blob_space, outputs)
    assert highlighted.phase == Phase.IDLE


@pytest.mark.unit
def test_apply_after_dismiss_still_works(state, rendered, blob_space):
    requested, outputs = recompute(state, RequestDrilldown(), blob_space, rendered)
    dismissed, outputs = recompute(requested, DismissDrilldown(), blob_space, outputs)
    applied, outputs = recompute(dismissed, ApplyDrilldown(1), blob_space, outputs)
    assert applied.drilldown_target == 1
    assert set(outputs.top_words["cluster"]) == {1}


@pytest.mark.unit
def test_bool_cluster_ids_rejected(state, rendered, blob_space):
    new_state, outputs = recompute(state, ChangeHighlight(True), blob_space, rendered)
    assert new_state == state
    assert outputs.error
    new_state, outputs = recompute(state, ApplyDrilldown(True), blob_space, rendered)
    assert new_state == state
    assert outputs.error
