"""Tests for k-means clustering."""
import numpy as np
import pytest

from pixelcomp_core.clustering import kmeans, quantize
from pixelcomp_core.errors import ConvergenceFailed, InvalidClusterCount
from pixelcomp_core.results import IterationStatus

TWO_PAIRS = np.array([[0.0, 0.0], [0.0, 1.0], [10.0, 10.0], [10.0, 11.0]])


def test_two_separated_pairs():
    result = kmeans(TWO_PAIRS, 2, rng=0)

    assert result.converged
    assert result.labels[0] == result.labels[1]
    assert result.labels[2] == result.labels[3]
    assert result.labels[0] != result.labels[2]
    centers = sorted(map(tuple, result.centroids))
    np.testing.assert_allclose(centers, [(0.0, 0.5), (10.0, 10.5)])
    np.testing.assert_allclose(result.inertia, 1.0)


def test_one_cluster_per_point_reproduces_input():
    points = np.array([[0.0, 0.0], [1.0, 2.0], [4.0, 4.0], [9.0, 1.0], [3.0, 7.0]])
    result = kmeans(points, len(points), rng=1)

    assert result.converged
    np.testing.assert_array_equal(result.quantized, points)


@pytest.mark.parametrize("k", [1, 0, 5])
def test_invalid_cluster_counts(k):
    with pytest.raises(InvalidClusterCount):
        kmeans(TWO_PAIRS, k)


def test_non_positive_iteration_budget():
    with pytest.raises(ValueError):
        kmeans(TWO_PAIRS, 2, max_iter=0)


def test_output_has_input_shape_and_at_most_k_colors():
    points = np.random.default_rng(0).normal(size=(60, 3)) * 20.0
    result = kmeans(points, 4, rng=0)
    quantized = result.quantized

    assert quantized.shape == points.shape
    distinct = np.unique(quantized, axis=0)
    assert len(distinct) <= 4
    for row in distinct:
        assert any(np.array_equal(row, center) for center in result.centroids)


def test_clustering_own_output_is_stable():
    points = np.random.default_rng(5).uniform(0, 255, size=(80, 3))
    first = kmeans(points, 4, rng=0)
    second = kmeans(first.quantized, 4, rng=0)

    assert second.converged
    assert second.iterations == 1
    np.testing.assert_allclose(second.quantized, first.quantized)


def test_empty_cluster_keeps_previous_centroid():
    points = np.array([[0.0, 0.0], [0.0, 0.0], [0.0, 0.0], [5.0, 5.0]])
    result = kmeans(points, 3, rng=0)

    assert result.converged
    assert result.empty_clusters == 1
    assert not np.isnan(result.centroids).any()
    np.testing.assert_array_equal(result.cluster_sizes(), [3, 1, 0])
    np.testing.assert_array_equal(result.centroids[2], [0.0, 0.0])


def test_iteration_cap_warns_and_returns_best_effort():
    with pytest.warns(ConvergenceFailed):
        result = kmeans(TWO_PAIRS, 2, max_iter=1, rng=0)

    assert result.status is IterationStatus.EXHAUSTED
    assert not result.converged
    assert result.quantized.shape == TWO_PAIRS.shape


def test_input_is_not_modified():
    points = TWO_PAIRS.copy()
    kmeans(points, 2, rng=0)
    np.testing.assert_array_equal(points, TWO_PAIRS)


def test_quantize_returns_replacement_matrix():
    quantized = quantize(TWO_PAIRS, 2, rng=0)
    np.testing.assert_allclose(
        quantized, [[0.0, 0.5], [0.0, 0.5], [10.0, 10.5], [10.0, 10.5]]
    )
