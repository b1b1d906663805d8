"""
Configuration for the CineMatch recommender.
Reads settings from environment variables (and a local .env file) with safe defaults.
"""

import os  # environment access
import sys  # stderr sink for loguru
from dataclasses import dataclass  # immutable settings container
from typing import Optional  # optional random seed

from dotenv import load_dotenv  # load .env into the environment
from loguru import logger  # console logger

load_dotenv()  # loads .env when present


def _optional_int(value: Optional[str]) -> Optional[int]:
	if value is None or not value.strip():
		return None
	return int(value)


@dataclass(frozen=True)
class Settings:
	"""
	Engine and service settings. Every field has a default so tests can build
	one directly; the service uses Settings.from_env().
	"""
	catalog_path: str = 'data/movies.jsonl'  # JSONL (or JSON array) catalog file
	log_level: str = 'INFO'  # loguru level for the console sink
	top_k: int = 10  # number of recommendations returned
	metadata_weight: float = 0.35  # damping applied to metadata before concatenation
	max_latent_dim: int = 32  # upper bound on requested singular components
	min_latent_dim: int = 4  # lower bound on requested singular components
	svd_iterations: int = 60  # power iterations per component
	svd_tolerance: float = 1e-6  # convergence and minimum singular value threshold
	random_seed: Optional[int] = None  # fixed seed for reproducible factorization

	@classmethod
	def from_env(cls) -> 'Settings':
		"""Build settings from environment variables, falling back to the defaults."""
		return cls(
			catalog_path=os.getenv('CATALOG_PATH', cls.catalog_path),
			log_level=os.getenv('LOG_LEVEL', cls.log_level).upper(),
			top_k=int(os.getenv('TOP_K', str(cls.top_k))),
			metadata_weight=float(os.getenv('METADATA_WEIGHT', str(cls.metadata_weight))),
			max_latent_dim=int(os.getenv('MAX_LATENT_DIM', str(cls.max_latent_dim))),
			min_latent_dim=int(os.getenv('MIN_LATENT_DIM', str(cls.min_latent_dim))),
			svd_iterations=int(os.getenv('SVD_ITERATIONS', str(cls.svd_iterations))),
			svd_tolerance=float(os.getenv('SVD_TOLERANCE', str(cls.svd_tolerance))),
			random_seed=_optional_int(os.getenv('RANDOM_SEED')),
		)


def configure_logging(level: str = 'INFO') -> None:
	"""Replace loguru's default sink with a stderr sink at the given level."""
	logger.remove()
	logger.add(sys.stderr, level=level.upper())
