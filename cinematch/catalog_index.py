"""
Catalog index module.
Keeps every movie's combined vector in catalog order, with an exact (case-insensitive)
title lookup and batch accessors used for scoring.
"""

# Import NumPy for the stacked vector matrix
import numpy as np  # numeric arrays
# Typing hints for clarity of public API
from typing import Dict, Iterator, List, Optional, Sequence  # type hints

# Import our record model for type hints and mapping
from .models import ItemRecord  # movie + combined vector

# Console logging
from loguru import logger  # console logger


def normalize_title(title: str) -> str:
	"""Lookup key for a title: trimmed and lowercased."""
	return (title or '').strip().lower()


class CatalogIndex:
	"""
	Read-only index over the catalog's item records.
	"""

	def __init__(self, records: Sequence[ItemRecord]):
		"""
		Build the index once from records in catalog order.
		- records: one ItemRecord per catalog movie, all vectors of equal length
		"""
		self.records: List[ItemRecord] = list(records)  # catalog order preserved
		# Map lowercased title -> record for O(1) exact lookups
		self.titles: Dict[str, ItemRecord] = {normalize_title(r.movie.title): r for r in self.records}

		# Stack vectors and norms once so scoring is a single matrix product
		dimension = len(self.records[0].vector) if self.records else 0
		self._matrix = np.zeros((len(self.records), dimension))
		for row, record in enumerate(self.records):
			self._matrix[row] = record.vector
		self._norms = np.array([record.norm for record in self.records], dtype=np.float64)
		self._matrix.setflags(write=False)  # shared across queries, never mutated
		self._norms.setflags(write=False)

		logger.info(f"[Index] Indexed {len(self.records)} movies | vector dim={dimension}")

	def get(self, title: str) -> Optional[ItemRecord]:
		"""Return the record whose title matches (case-insensitive), or None."""
		return self.titles.get(normalize_title(title))

	def first(self) -> Optional[ItemRecord]:
		"""Return the first catalog record, or None for an empty index."""
		return self.records[0] if self.records else None

	def vector_matrix(self) -> np.ndarray:
		"""All combined vectors stacked as rows, in catalog order."""
		return self._matrix

	def norms(self) -> np.ndarray:
		"""Precomputed norms, aligned with vector_matrix() rows."""
		return self._norms

	def summary(self) -> List[Dict]:
		"""Title/genre/year view of the catalog for listing."""
		return [
			{'title': r.movie.title, 'category': r.movie.genre, 'year': r.movie.year}
			for r in self.records
		]

	def __len__(self) -> int:
		return len(self.records)

	def __iter__(self) -> Iterator[ItemRecord]:
		return iter(self.records)
