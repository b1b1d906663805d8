"""
Feature composition module.
Builds genre/year metadata vectors for movies and free-text queries, and fuses them
with latent vectors into the combined space the ranker compares.
"""

# Regex for year extraction and whitespace cleanup
import re  # pattern matching
# Typing helpers for clear signatures
from typing import Dict, List, Optional, Sequence, Tuple  # type hints

# NumPy for the metadata vectors
import numpy as np  # numeric arrays

# Console logging
from loguru import logger  # console logger

# Our movie data class
from .models import Movie  # parsed catalog entry

# Weight applied to metadata before it is appended to the latent vector
METADATA_WEIGHT = 0.35

# Four-digit years in the 1900s or 2000s
RE_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")

# Nicknames for genres whose everyday wording differs from the catalog label.
# Each rule: if the lowercased label contains any trigger, every variant also matches it.
GENRE_SYNONYM_RULES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
	(('science fiction', 'sci-fi', 'sci fi', 'scifi'), ('science fiction', 'sci-fi', 'sci fi', 'scifi')),
	(('romance',), ('romantic',)),
	(('thriller',), ('suspense',)),
	(('comedy',), ('funny', 'humor')),
	(('horror',), ('scary',)),
	(('animation',), ('animated',)),
	(('biography',), ('biopic',)),
)


def _collapse_spaces(text: str) -> str:
	return re.sub(r"\s+", ' ', text).strip()


def genre_keywords(genre: str) -> List[str]:
	"""
	All lowercase phrases that count as a mention of 'genre' in query text:
	the label itself, its hyphen/ampersand/slash spellings, and any nicknames.
	"""
	lower = genre.lower()
	variants = [
		lower,
		_collapse_spaces(lower.replace('-', ' ')),  # "sci-fi" -> "sci fi"
		_collapse_spaces(lower.replace('&', ' and ')),  # "action & adventure" -> "action and adventure"
		_collapse_spaces(lower.replace('/', ' ')),  # "war/politics" -> "war politics"
		_collapse_spaces(lower),
	]
	for triggers, nicknames in GENRE_SYNONYM_RULES:
		if any(trigger in lower for trigger in triggers):
			variants.extend(nicknames)

	keywords = []
	for variant in variants:
		if variant and variant not in keywords:
			keywords.append(variant)
	return keywords


def combine(latent: np.ndarray, metadata: np.ndarray, metadata_weight: float = METADATA_WEIGHT) -> Tuple[np.ndarray, float]:
	"""Concatenate the latent vector with the damped metadata vector and return it with its norm."""
	vector = np.concatenate([np.asarray(latent, dtype=np.float64), np.asarray(metadata, dtype=np.float64) * metadata_weight])
	return vector, float(np.linalg.norm(vector))


class FeatureComposer:
	"""
	Holds the catalog-wide statistics that metadata vectors depend on:
	the sorted genre list and the observed release-year range.
	"""

	def __init__(self, movies: Sequence[Movie], metadata_weight: float = METADATA_WEIGHT):
		self.metadata_weight = metadata_weight

		# Genre slots in sorted order
		self.genres: List[str] = sorted({genre for movie in movies for genre in movie.genres})
		self.genre_index: Dict[str, int] = {genre: position for position, genre in enumerate(self.genres)}
		self.genre_keywords: Dict[str, List[str]] = {genre: genre_keywords(genre) for genre in self.genres}

		# Year statistics for normalization
		years = [movie.year_value for movie in movies if movie.year_value is not None]
		self.min_year: Optional[int] = min(years) if years else None
		self.max_year: Optional[int] = max(years) if years else None
		if self.min_year is not None and self.max_year != self.min_year:
			self.year_range = float(self.max_year - self.min_year)
		else:
			self.year_range = 1.0  # single distinct year (or none): avoid dividing by zero

		if years:
			mean_year = sum(years) / len(years)
			self.normalized_mean_year = (mean_year - self.min_year) / self.year_range
		else:
			self.normalized_mean_year = 0.5  # no years at all

		logger.debug(
			f"[Features] {len(self.genres)} genres | years={self.min_year}-{self.max_year} | mean={self.normalized_mean_year:.3f}"
		)

	@property
	def metadata_length(self) -> int:
		return len(self.genres) + 1  # genre flags plus the year slot

	def normalize_year(self, year: Optional[int]) -> float:
		"""Scale a year to [0, 1] against the catalog range; unknown years get the catalog mean."""
		if year is None or self.min_year is None:
			return self.normalized_mean_year
		clamped = min(max(year, self.min_year), self.max_year)
		return (clamped - self.min_year) / self.year_range

	def item_metadata(self, movie: Movie) -> np.ndarray:
		"""Metadata vector for a catalog movie: genre flags, then the normalized year."""
		features = np.zeros(self.metadata_length)
		for genre in movie.genres:
			position = self.genre_index.get(genre)
			if position is not None:
				features[position] = 1.0

		features[-1] = self.normalize_year(movie.year_value)
		return features

	def query_metadata(self, text: str) -> Tuple[np.ndarray, List[str], Optional[int]]:
		"""
		Metadata vector for free text: genres whose keywords appear in the text,
		plus the first 19xx/20xx year mentioned (which may lie outside the catalog range).
		Returns (vector, matched genres in sorted order, inferred year or None).
		"""
		features = np.zeros(self.metadata_length)
		lowered = (text or '').lower()

		matched: List[str] = []
		for position, genre in enumerate(self.genres):
			if any(keyword in lowered for keyword in self.genre_keywords[genre]):
				features[position] = 1.0
				matched.append(genre)

		match = RE_YEAR.search(lowered)
		inferred_year = int(match.group(0)) if match else None

		features[-1] = self.normalize_year(inferred_year)
		logger.debug(f"[Features] Query metadata | genres={matched} | year={inferred_year}")
		return features, matched, inferred_year

	def combine(self, latent: np.ndarray, metadata: np.ndarray) -> Tuple[np.ndarray, float]:
		return combine(latent, metadata, self.metadata_weight)
