"""
Matrix factorization module.
Computes a truncated SVD of the item-by-term matrix with power iteration and deflation,
and turns the right singular vectors into a projection from term space to latent space.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger


@dataclass
class SingularComponent:
	"""One (sigma, u, v) triple: u spans item space, v spans term space."""
	sigma: float
	u: np.ndarray
	v: np.ndarray


def random_unit_vector(length: int, rng: np.random.Generator) -> np.ndarray:
	"""
	Draw a non-negative random vector and scale it to unit length.
	Falls back to the first basis vector if the draw has zero norm.
	"""
	vector = rng.random(length)
	norm = np.linalg.norm(vector)
	if not norm:
		vector = np.zeros(length)
		vector[0] = 1.0
		return vector
	return vector / norm


def truncated_svd(
	matrix: np.ndarray,
	rank: int,
	iterations: int = 50,
	tolerance: float = 1e-6,
	rng: Optional[np.random.Generator] = None,
) -> List[SingularComponent]:
	"""
	Extract up to 'rank' singular components, largest first.

	Each component runs power iteration on the residual matrix, alternating
	u = normalize(R v) and v = normalize(R^T u) until successive v vectors align
	within 'tolerance'. The component is then removed from the residual
	(R -= sigma * u v^T) before the next one is extracted.

	Extraction stops early, returning what it has, when a zero vector appears
	or when sigma is non-finite or below 'tolerance'. Callers must accept fewer
	components than requested.
	"""
	if rng is None:
		rng = np.random.default_rng()

	rows, columns = matrix.shape
	effective_rank = min(rank, rows, columns)
	residual = np.array(matrix, dtype=np.float64, copy=True)
	components: List[SingularComponent] = []

	for component in range(effective_rank):
		v = random_unit_vector(columns, rng)
		degenerate = False

		for _ in range(iterations):
			u_raw = residual @ v
			u_norm = np.linalg.norm(u_raw)
			if not u_norm:
				degenerate = True
				break
			u = u_raw / u_norm

			v_raw = residual.T @ u
			v_norm = np.linalg.norm(v_raw)
			if not v_norm:
				degenerate = True
				break
			next_v = v_raw / v_norm

			alignment = float(next_v @ v)
			v = next_v
			if abs(1.0 - abs(alignment)) < tolerance:
				break

		if degenerate:
			logger.debug(f"[Factorizer] Zero vector while extracting component {component}; stopping")
			break

		u_raw = residual @ v
		sigma = float(np.linalg.norm(u_raw))
		if not np.isfinite(sigma) or sigma < tolerance:
			logger.debug(f"[Factorizer] Singular value {sigma:.3g} at component {component}; stopping")
			break

		u = u_raw / sigma
		components.append(SingularComponent(sigma=sigma, u=u, v=v))
		residual -= sigma * np.outer(u, v)

	logger.info(f"[Factorizer] Extracted {len(components)} of {effective_rank} requested components")
	return components


def build_projection(components: Sequence[SingularComponent], vocab_size: int) -> np.ndarray:
	"""Stack the right singular vectors as columns of a (vocab_size, k) projection."""
	if not components:
		return np.zeros((vocab_size, 0))
	return np.column_stack([component.v for component in components])


def project_rows(matrix: np.ndarray, projection: np.ndarray) -> np.ndarray:
	"""
	Latent coordinates of every row of the original (undeflated) matrix.
	Recomputed from the projection rather than read off u, so early termination cannot skew them.
	"""
	return matrix @ projection


def project_entries(entries: Sequence[Tuple[int, float]], projection: np.ndarray) -> np.ndarray:
	"""Latent vector for a sparse list of (term position, weight) pairs."""
	latent = np.zeros(projection.shape[1])
	for position, weight in entries:
		latent += weight * projection[position]
	return latent
