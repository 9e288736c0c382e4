import numpy as np
import pytest

from cluster_lens.core.clustering import KMeansClusterer, cluster, compute_elbow_curve
from cluster_lens.core.matrix import EmbeddingMatrix
from cluster_lens.errors import InvalidParameter


@pytest.mark.unit
def test_two_pairs_split_into_two_clusters(two_pairs_matrix):
    assignment = cluster(two_pairs_matrix, 2, seed=42)
    assert assignment["a"] == assignment["b"]
    assert assignment["c"] == assignment["d"]
    assert assignment["a"] != assignment["c"]
    assert set(assignment.labels.values()) == {1, 2}


@pytest.mark.unit
@pytest.mark.parametrize("k", [1, 2, 3, 5, 10])
def test_ids_are_contiguous_and_clusters_non_empty(blob_matrix, clusterer, k):
    assignment = clusterer.cluster(blob_matrix, k)
    assert len(assignment) == blob_matrix.n_words
    assert set(assignment.labels.values()) == set(range(1, k + 1))
    assert all(size > 0 for size in assignment.sizes().values())
    assert sum(assignment.sizes().values()) == blob_matrix.n_words


@pytest.mark.unit
def test_blobs_recovered_at_k3(blob_matrix, clusterer):
    assignment = clusterer.cluster(blob_matrix, 3)
    groups = [blob_matrix.words[i:i + 10] for i in (0, 10, 20)]
    for group in groups:
        assert len({assignment[w] for w in group}) == 1
    assert len({assignment[g[0]] for g in groups}) == 3


@pytest.mark.unit
def test_repeat_calls_are_identical(blob_matrix):
    first = cluster(blob_matrix, 4, seed=42)
    second = cluster(blob_matrix, 4, seed=42)
    assert first.labels == second.labels


@pytest.mark.unit
def test_members_follow_matrix_order(two_pairs_matrix):
    assignment = cluster(two_pairs_matrix, 2)
    cid = assignment["c"]
    assert assignment.members(cid) == ["c", "d"]


@pytest.mark.unit
@pytest.mark.parametrize("k", [0, -1, 5])
def test_k_out_of_range_rejected(two_pairs_matrix, k):
    with pytest.raises(InvalidParameter):
        cluster(two_pairs_matrix, k)


@pytest.mark.unit
def test_k_above_distinct_vectors_rejected():
    matrix = EmbeddingMatrix(
        words=("x", "y", "z"),
        vectors=np.array([[1.0, 1.0], [1.0, 1.0], [2.0, 2.0]]),
    )
    assert matrix.n_distinct_points == 2
    with pytest.raises(InvalidParameter):
        cluster(matrix, 3)
    assert len(cluster(matrix, 2).labels) == 3


@pytest.mark.unit
def test_too_few_restarts_rejected():
    with pytest.raises(InvalidParameter):
        KMeansClusterer(n_init=5)


@pytest.mark.unit
def test_elbow_curve_shape(blob_matrix):
    curve = compute_elbow_curve(blob_matrix, k_max=6, n_init=10)
    assert curve.ks == [1, 2, 3, 4, 5, 6]
    assert all(i >= 0 for i in curve.inertias)
    inertias = curve.inertias
    assert inertias[0] > inertias[1] > inertias[2]
    assert inertias[-1] < inertias[0]
    frame = curve.to_frame()
    assert list(frame.columns) == ["k", "inertia"]
    assert len(frame) == 6


@pytest.mark.unit
def test_elbow_steepest_drop_on_two_pairs(two_pairs_matrix):
    curve = compute_elbow_curve(two_pairs_matrix, k_max=4)
    inertias = curve.inertias
    drops = [a - b for a, b in zip(inertias, inertias[1:])]
    assert drops.index(max(drops)) == 0
    assert inertias[-1] == pytest.approx(0.0)


@pytest.mark.unit
def test_elbow_capped_at_distinct_vectors():
    matrix = EmbeddingMatrix(
        words=("x", "y", "z", "w"),
        vectors=np.array([[0.0, 0.0], [0.0, 0.0], [3.0, 0.0], [0.0, 3.0]]),
    )
    curve = compute_elbow_curve(matrix, k_max=10)
    assert curve.ks == [1, 2, 3]


@pytest.mark.unit
def test_elbow_rejects_non_positive_k_max(two_pairs_matrix):
    with pytest.raises(InvalidParameter):
        compute_elbow_curve(two_pairs_matrix, k_max=0)


@pytest.mark.unit
def test_repeat_elbow_curves_are_identical(blob_matrix):
    first = compute_elbow_curve(blob_matrix, 6, seed=42)
    second = compute_elbow_curve(blob_matrix, 6, seed=42)
    assert first.points == second.points
