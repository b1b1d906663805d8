"""
Query resolution module.
Turns an incoming seed string into a QueryContext: either an existing catalog movie
(exact title match, or the default movie) or a free-text description projected into
the combined space.
"""

from loguru import logger  # console logging

from .factorization import project_entries  # sparse term vector -> latent vector
from .models import EngineState, ItemRecord, QueryContext  # engine state and query container


class QueryResolver:
	"""
	Resolves seeds against a ready EngineState.
	Resolution order for the trimmed seed:
	1) empty                          -> first catalog movie
	2) exact title (case-insensitive) -> that movie
	3) text with known vocabulary     -> projected text + inferred genres/year
	4) text with no known vocabulary  -> first catalog movie
	"""

	def __init__(self, state: EngineState):
		self.state = state

	def resolve(self, seed: str) -> QueryContext:
		"""Main entry: produce a QueryContext for a raw seed."""
		trimmed = (seed or '').strip()  # normalize surrounding whitespace
		logger.debug(f"[Resolver] Resolving seed '{trimmed}'")

		# 1) Empty seed: default view
		if not trimmed:
			return self._from_default(trimmed)

		# 2) Exact catalog title
		record = self.state.index.get(trimmed)
		if record is not None:
			logger.debug(f"[Resolver] Seed matched catalog title '{record.movie.title}'")
			return self._from_record(trimmed, record)

		# 3) / 4) Free text
		_, entries = self.state.vectorizer.vectorize_text(trimmed)
		if not entries:
			logger.debug("[Resolver] No known terms in seed; using the default movie")
			return self._from_default(trimmed)

		latent = project_entries(entries, self.state.projection)
		metadata, genres, year = self.state.composer.query_metadata(trimmed)
		vector, norm = self.state.composer.combine(latent, metadata)
		logger.debug(f"[Resolver] Free-text seed | terms={len(entries)} genres={genres} year={year} norm={norm:.4f}")
		return QueryContext(
			seed=trimmed,
			vector=vector,
			norm=norm,
			reference_title=None,
			active_genres=genres,
			year=year,
			matched_by_title=False,
		)

	def _from_default(self, trimmed: str) -> QueryContext:
		record = self.state.index.first()
		if record is None:
			# Empty catalog: nothing to compare against
			return QueryContext(
				seed=trimmed,
				vector=None,
				norm=0.0,
				reference_title=None,
				active_genres=[],
				year=None,
				matched_by_title=False,
			)
		return self._from_record(trimmed, record)

	def _from_record(self, trimmed: str, record: ItemRecord) -> QueryContext:
		return QueryContext(
			seed=trimmed,
			vector=record.vector,
			norm=record.norm,
			reference_title=record.movie.title,
			active_genres=list(record.movie.genres),
			year=record.movie.year_value,
			matched_by_title=True,
		)
