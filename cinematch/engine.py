"""
Recommender engine module.
Owns the one-time initialization (vocabulary, factorization, per-item vectors, index)
and exposes the three operations served to callers: catalog summary, health, and recommend.
"""

import threading  # single-initialization guard shared by request threads
import time  # measure initialization latency
from enum import Enum  # lifecycle states
from typing import Any, Dict, Optional, Sequence  # type annotations for clarity

import numpy as np  # latent matrices and random source

# Import project modules for data structures and components
from .catalog_index import CatalogIndex  # per-item vectors and title lookup
from .config import Settings  # tunable parameters
from .data_loader import DataLoader  # record parsing and validation
from .errors import InitializationFailure  # cached initialization error
from .factorization import build_projection, project_rows, truncated_svd  # latent space
from .features import FeatureComposer  # genre/year metadata
from .models import EngineState, ItemRecord  # core data classes
from .query_resolver import QueryResolver  # seed -> query context
from .ranking import Ranker  # cosine ranking and insights
from .text_vectorizer import TextVectorizer, tokenize  # TF-IDF over catalog text

# Import loguru for console logging
from loguru import logger  # simple structured logger


class EngineStatus(str, Enum):
	UNINITIALIZED = 'uninitialized'
	INITIALIZING = 'initializing'
	READY = 'ready'
	FAILED = 'failed'


def requested_rank(item_count: int, vocab_size: int, min_dim: int = 4, max_dim: int = 32) -> int:
	"""Number of singular components to ask for; zero when there is no vocabulary."""
	if vocab_size == 0:
		return 0
	return min(max_dim, max(min_dim, min(item_count, vocab_size)))


class RecommenderEngine:
	"""
	High-level recommender API combining text vectorization, factorization, metadata features, and ranking.
	The catalog-derived state is built lazily on first use, exactly once, and is read-only afterwards.
	A failed initialization is remembered and re-raised to every caller; it is never retried.
	"""

	def __init__(
		self,
		records: Sequence[Any],  # raw catalog records, in catalog order
		settings: Optional[Settings] = None,  # tunables (defaults when omitted)
		rng: Optional[np.random.Generator] = None,  # random source for power iteration
		load_error: Optional[Exception] = None,  # catalog read failure captured at startup
	):
		# Keep the raw catalog; parsing happens during initialization so bad data fails there
		self.records = list(records)  # immutable input snapshot
		self.load_error = load_error  # surfaced as the initialization failure
		self.settings = settings or Settings()  # configuration
		self.rng = rng if rng is not None else np.random.default_rng(self.settings.random_seed)  # randomness
		self.loader = DataLoader()  # parser/validator
		self.ranker = Ranker(top_k=self.settings.top_k)  # ranker instance

		# Lifecycle fields, written only while holding the lock
		self._lock = threading.Lock()  # single in-flight initialization
		self._state: Optional[EngineState] = None  # ready state
		self._error: Optional[InitializationFailure] = None  # cached failure
		self._status = EngineStatus.UNINITIALIZED  # current lifecycle state

	@property
	def status(self) -> EngineStatus:
		return self._status

	def ensure_ready(self, blocking: bool = True) -> Optional[EngineState]:
		"""
		Initialize on first call and return the shared state.
		Concurrent callers wait for the same attempt. With blocking=False, returns None
		instead of waiting when another caller is mid-initialization.
		Raises the cached InitializationFailure if initialization failed.
		"""
		if self._state is not None:  # fast path once ready
			return self._state
		if self._error is not None:  # failure is permanent
			raise self._error

		if not self._lock.acquire(blocking=blocking):
			return None  # someone else is initializing
		try:
			if self._state is None and self._error is None:  # first caller does the work
				self._initialize()
		finally:
			self._lock.release()

		if self._error is not None:
			raise self._error
		return self._state

	def _initialize(self) -> None:
		"""Build the state, then publish either the state or the failure (never both, never partial)."""
		self._status = EngineStatus.INITIALIZING
		logger.info(f"[Engine] Initializing recommender over {len(self.records)} catalog records...")
		start = time.time()  # start timer
		try:
			state = self._build_state()
		except Exception as e:
			failure = e if isinstance(e, InitializationFailure) else InitializationFailure(str(e) or type(e).__name__)
			if failure is not e:
				failure.__cause__ = e  # keep the original error for diagnostics
			logger.error(f"[Engine] Initialization failed: {failure}")
			self._error = failure
			self._status = EngineStatus.FAILED
			return

		self._state = state
		self._status = EngineStatus.READY
		logger.info(
			f"[Engine] Ready in {time.time() - start:.2f}s | movies={len(state.index)} "
			f"vocab={state.vectorizer.vocab_size} latent_dim={state.latent_dim}"
		)

	def _build_state(self) -> EngineState:
		"""Vectorize the catalog, factorize it, compose per-item vectors, and index them."""
		settings = self.settings
		if self.load_error is not None:  # the catalog file itself could not be read
			raise self.load_error
		movies = self.loader.parse_movies(self.records)  # raises ValueError on malformed catalog

		# 1) Vocabulary and TF-IDF over title + genre + plot
		documents = [tokenize(' '.join(part for part in (m.title, m.genre, m.plot) if part)) for m in movies]
		vectorizer = TextVectorizer().fit(documents)
		composer = FeatureComposer(movies, metadata_weight=settings.metadata_weight)
		vocab_size = vectorizer.vocab_size

		# 2) Latent space from the truncated SVD of the item-by-term matrix
		rank = requested_rank(len(movies), vocab_size, settings.min_latent_dim, settings.max_latent_dim)
		if rank == 0:
			logger.warning("[Engine] Catalog has no extractable terms; using metadata-only vectors")
			projection = np.zeros((0, 0))
			latent = np.zeros((len(movies), 0))
		else:
			matrix = vectorizer.document_matrix(documents)
			components = truncated_svd(
				matrix,
				rank,
				iterations=settings.svd_iterations,
				tolerance=settings.svd_tolerance,
				rng=self.rng,
			)
			projection = build_projection(components, vocab_size)
			latent = project_rows(matrix, projection)
			attainable = min(rank, len(movies), vocab_size)
			if len(components) < attainable:
				logger.warning(
					f"[Engine] Factorization stopped early: latent_dim={len(components)} (requested {rank}, attainable {attainable})"
				)

		# 3) Combined vectors per movie
		records = []
		for row, movie in enumerate(movies):
			metadata = composer.item_metadata(movie)
			vector, norm = composer.combine(latent[row], metadata)
			records.append(ItemRecord(movie=movie, vector=vector, norm=norm))

		# 4) Index
		index = CatalogIndex(records)
		return EngineState(
			projection=projection,
			latent_dim=projection.shape[1],
			requested_rank=rank,
			index=index,
			vectorizer=vectorizer,
			composer=composer,
			default_seed=movies[0].title,
		)

	def get_catalog_summary(self) -> Dict[str, Any]:
		"""Title/genre/year listing of the catalog plus the default seed title."""
		state = self.ensure_ready()
		return {'items': state.summary, 'default_seed': state.default_seed}

	def get_health(self) -> Dict[str, str]:
		"""Report ready / initializing / error without raising."""
		try:
			self.ensure_ready(blocking=False)
		except InitializationFailure:
			pass  # reported below from the cached error

		if self._error is not None:
			return {'status': 'error', 'message': str(self._error)}
		if self._state is None:
			return {'status': 'initializing'}
		return {'status': 'ready'}

	def recommend(self, seed: str) -> Dict[str, Any]:
		"""Resolve the seed, rank the catalog, and return the explained top results."""
		state = self.ensure_ready()
		context = QueryResolver(state).resolve(seed)
		recommendations = self.ranker.rank(state.index, context)
		logger.info(
			f"[Engine] recommend seed='{context.seed}' reference={context.reference_title} -> {len(recommendations)} results"
		)
		return {
			'seed': context.seed,
			'reference_title': context.reference_title,
			'recommendations': [r.to_dict() for r in recommendations],
			'profile': {'categories': list(context.active_genres), 'year': context.year},
		}
