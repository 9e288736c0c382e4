import pytest

from cluster_lens.core.projector import project
from cluster_lens.visualization import (
    NO_HIGHLIGHT,
    ElbowChartBuilder,
    ScatterPlotBuilder,
    compose_elbow_annotation,
    compose_scatter_view,
)
import config


@pytest.fixture
def views(blob_matrix, clusterer):
    points = project(blob_matrix)
    assignment = clusterer.cluster(blob_matrix, 3)
    return points, assignment


@pytest.mark.unit
def test_scatter_has_one_trace_per_cluster(views):
    points, assignment = views
    fig = ScatterPlotBuilder().build(compose_scatter_view(points, assignment, NO_HIGHLIGHT))
    assert [t.name for t in fig.data] == ["Cluster 1", "Cluster 2", "Cluster 3"]
    assert all(t.opacity == 1.0 for t in fig.data)
    assert sum(len(t.x) for t in fig.data) == len(points)


@pytest.mark.unit
def test_highlighted_scatter_has_cluster_and_others(views):
    points, assignment = views
    fig = ScatterPlotBuilder().build(compose_scatter_view(points, assignment, 2), title="k=3")
    assert [t.name for t in fig.data] == ["Cluster 2", config.OTHERS_LABEL]
    assert fig.data[0].opacity == 1.0
    assert fig.data[1].opacity == pytest.approx(config.DIM_OPACITY)
    assert fig.layout.title.text == "k=3"


@pytest.mark.unit
def test_elbow_chart_marks_selected_k(blob_space):
    elbow = compose_elbow_annotation(blob_space.ensure_elbow_curve(k_max=5), 3)
    fig = ElbowChartBuilder().build(elbow)
    assert len(fig.data) == 2
    assert list(fig.data[0].x) == [1, 2, 3, 4, 5]
    assert list(fig.data[1].x) == [3]
