"""
Data models for the CineMatch recommender.
Defines the core data structures shared by the loader, the engine, and the ranker.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import TYPE_CHECKING, Dict, List, Optional  # lists, mappings, and optional values

# NumPy arrays hold every vector the engine computes
import numpy as np  # dense numeric vectors

if TYPE_CHECKING:
	from .catalog_index import CatalogIndex  # only needed for the annotations below
	from .features import FeatureComposer
	from .text_vectorizer import TextVectorizer


@dataclass(frozen=True)
class Movie:
	"""
	Represents a single catalog movie as read from the data source, plus its parsed fields.
	The raw fields are echoed back to callers unchanged; the parsed ones drive the features.
	"""
	title: str  # unique title as written in the catalog (lookups are case-insensitive)
	plot: str  # short synopsis used for the text features
	genre: str  # raw comma-delimited genre string (e.g., "Sci-Fi, Drama")
	year: Optional[int]  # release year as supplied (None when unknown)
	poster: Optional[str] = None  # optional image reference for the UI
	genres: List[str] = field(default_factory=list)  # parsed, trimmed, de-duplicated genre labels
	year_value: Optional[int] = None  # numeric year used for features (None when unknown)


@dataclass
class ItemRecord:
	"""
	A catalog movie together with its combined (latent + metadata) vector.
	Built once during engine initialization and only read afterwards.
	"""
	movie: Movie  # the parsed catalog entry
	vector: np.ndarray  # combined vector: latent part followed by damped metadata
	norm: float  # precomputed Euclidean norm of 'vector'


@dataclass
class QueryContext:
	"""
	Everything the ranker needs to know about one resolved seed.
	"""
	seed: str  # trimmed seed text as received
	vector: Optional[np.ndarray]  # query vector in the combined space (None when unresolvable)
	norm: float  # norm of 'vector' (0.0 when unresolvable)
	reference_title: Optional[str]  # catalog title the seed resolved to, if any
	active_genres: List[str]  # genres that describe the query
	year: Optional[int]  # year that describes the query
	matched_by_title: bool  # True when the query is an existing catalog movie


@dataclass
class Recommendation:
	"""One ranked movie with its similarity score and a short explanation."""
	movie: Movie
	score: float
	insight: str

	def to_dict(self) -> Dict:
		return {
			'title': self.movie.title,
			'plot': self.movie.plot,
			'category': self.movie.genre,
			'year': self.movie.year,
			'image': self.movie.poster,
			'score': self.score,
			'insight': self.insight,
		}


@dataclass(frozen=True)
class EngineState:
	"""
	The fully initialized, read-only state shared by every query.
	'requested_rank' is kept next to 'latent_dim' so a reduced factorization stays visible.
	"""
	projection: np.ndarray  # (vocab_size, latent_dim) map from term space to latent space
	latent_dim: int  # number of singular components actually extracted
	requested_rank: int  # number of components asked of the factorizer
	index: 'CatalogIndex'  # per-item vectors and the title lookup
	vectorizer: 'TextVectorizer'  # fitted vocabulary and IDF weights
	composer: 'FeatureComposer'  # genre slots and year statistics
	default_seed: str  # first catalog title, used for the default view

	@property
	def summary(self) -> List[Dict]:
		return self.index.summary()
