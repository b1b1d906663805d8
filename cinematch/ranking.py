"""
Ranking module.
Scores catalog movies against a resolved query with cosine similarity and explains each hit.
"""

import math
from typing import List, Optional

import numpy as np
from loguru import logger

from .catalog_index import CatalogIndex
from .models import ItemRecord, QueryContext, Recommendation


def cosine_similarity(vector_a: np.ndarray, norm_a: float, vector_b: np.ndarray, norm_b: float) -> float:
	"""
	Dot product over the product of norms.
	Returns 0.0 when either norm is zero or the vectors differ in length.
	"""
	if not norm_a or not norm_b or len(vector_a) != len(vector_b):
		return 0.0
	return float(np.dot(vector_a, vector_b) / (norm_a * norm_b))


class Ranker:
	"""
	Ranks the whole catalog for one query:
	- similarity: cosine between the query vector and each item's combined vector
	- order: descending similarity, ties kept in catalog order
	- insight: shared genres and release-year proximity, or a generic semantic note
	"""

	def __init__(self, top_k: int = 10, score_precision: int = 4):
		self.top_k = top_k
		self.score_precision = score_precision

	def rank(self, index: CatalogIndex, context: QueryContext) -> List[Recommendation]:
		"""Return up to top_k recommendations, excluding the reference movie."""
		if context.vector is None or not context.norm or not len(index):
			logger.debug("[Ranker] No usable query vector; returning no recommendations")
			return []

		scores = self._similarities(index, context.vector, context.norm)
		order = np.argsort(-scores, kind='stable')  # stable: ties keep catalog order

		results: List[Recommendation] = []
		for row in order:
			if len(results) >= self.top_k:
				break
			record = index.records[row]
			if context.reference_title is not None and record.movie.title == context.reference_title:
				continue
			score = float(scores[row])
			results.append(Recommendation(
				movie=record.movie,
				score=round(score, self.score_precision) if math.isfinite(score) else 0.0,
				insight=self.build_insight(record, context),
			))

		logger.debug(f"[Ranker] Ranked {len(index)} movies, returning {len(results)}")
		return results

	def _similarities(self, index: CatalogIndex, vector: np.ndarray, norm: float) -> np.ndarray:
		"""Cosine similarity of the query against every indexed vector (zeros where undefined)."""
		matrix = index.vector_matrix()
		norms = index.norms()
		scores = np.zeros(len(index))
		if matrix.shape[1] != len(vector):
			logger.warning(
				f"[Ranker] Query dim {len(vector)} does not match index dim {matrix.shape[1]}; scoring as zero"
			)
			return scores

		valid = norms > 0
		scores[valid] = (matrix[valid] @ vector) / (norms[valid] * norm)
		return scores

	def build_insight(self, record: ItemRecord, context: QueryContext) -> str:
		"""Short human-readable reason for recommending 'record'."""
		movie = record.movie
		highlights: List[str] = []

		if context.active_genres and movie.genres:
			shared = [genre for genre in movie.genres if genre in context.active_genres]
			if shared:
				highlights.append(f"Shared genres: {', '.join(shared)}")

		year_note = self._year_highlight(movie.year_value, context.year)
		if year_note:
			highlights.append(year_note)

		if not highlights:
			highlights.append(
				'Semantic twin to your seed movie' if context.matched_by_title else 'Semantic match to your description'
			)

		return ' • '.join(highlights)

	def _year_highlight(self, year: Optional[int], context_year: Optional[int]) -> Optional[str]:
		if year is None or context_year is None:
			return None
		difference = abs(year - context_year)
		if difference == 0:
			return 'Released in the same year'
		if difference <= 2:
			return f"Released {difference} year{'' if difference == 1 else 's'} apart"
		if difference <= 5:
			return f"Within {difference} years of your reference"
		return None
