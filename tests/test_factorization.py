"""
Unit tests for the power-iteration truncated SVD and the projection helpers.
"""

import numpy as np
import pytest

from cinematch.factorization import (
	build_projection,
	project_entries,
	project_rows,
	random_unit_vector,
	truncated_svd,
)


def test_rank_one_matrix_recovers_singular_value_and_stops():
	matrix = np.outer([1.0, 2.0, 2.0], [3.0, 4.0])  # sigma = 3 * 5
	components = truncated_svd(matrix, rank=2, rng=np.random.default_rng(0))
	assert len(components) == 1
	assert components[0].sigma == pytest.approx(15.0, rel=1e-6)
	assert abs(components[0].v @ np.array([0.6, 0.8])) == pytest.approx(1.0, rel=1e-6)


def test_components_are_ordered_by_singular_value():
	matrix = np.diag([3.0, 2.0, 1.0])
	components = truncated_svd(matrix, rank=3, iterations=200, rng=np.random.default_rng(1))
	sigmas = [c.sigma for c in components]
	assert sigmas == pytest.approx([3.0, 2.0, 1.0], rel=1e-3)


def test_zero_matrix_yields_no_components():
	assert truncated_svd(np.zeros((3, 4)), rank=3, rng=np.random.default_rng(0)) == []


def test_rank_is_capped_by_matrix_shape():
	matrix = np.random.default_rng(3).random((2, 6))
	components = truncated_svd(matrix, rank=32, rng=np.random.default_rng(0))
	assert len(components) <= 2


def test_same_seed_is_reproducible():
	matrix = np.random.default_rng(5).random((6, 9))
	first = truncated_svd(matrix, rank=4, rng=np.random.default_rng(11))
	second = truncated_svd(matrix, rank=4, rng=np.random.default_rng(11))
	assert len(first) == len(second)
	for a, b in zip(first, second):
		assert a.sigma == b.sigma
		assert np.array_equal(a.v, b.v)


def test_input_matrix_is_not_modified():
	matrix = np.random.default_rng(9).random((4, 5))
	original = matrix.copy()
	truncated_svd(matrix, rank=3, rng=np.random.default_rng(0))
	assert np.array_equal(matrix, original)


def test_projection_shapes_and_sparse_projection_agree():
	matrix = np.random.default_rng(2).random((5, 7))
	components = truncated_svd(matrix, rank=3, rng=np.random.default_rng(0))
	projection = build_projection(components, vocab_size=7)
	assert projection.shape == (7, len(components))

	latent = project_rows(matrix, projection)
	assert latent.shape == (5, len(components))

	entries = [(position, float(weight)) for position, weight in enumerate(matrix[0]) if weight]
	assert project_entries(entries, projection) == pytest.approx(latent[0])


def test_empty_projection():
	projection = build_projection([], vocab_size=4)
	assert projection.shape == (4, 0)
	assert project_entries([(1, 2.0)], projection).shape == (0,)


def test_random_unit_vector_has_unit_norm():
	vector = random_unit_vector(10, np.random.default_rng(0))
	assert np.linalg.norm(vector) == pytest.approx(1.0)
