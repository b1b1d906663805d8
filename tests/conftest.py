"""
Shared pytest fixtures: the two-movie scenario catalog and the bundled sample catalog.
"""

from pathlib import Path

import numpy as np
import pytest

from cinematch.config import Settings
from cinematch.data_loader import DataLoader
from cinematch.engine import RecommenderEngine

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def scenario_records():
	return [
		{"title": "Nova", "genre": "Sci-Fi, Drama", "year": 2010, "plot": "a pilot discovers a signal"},
		{"title": "Quiet Town", "genre": "Drama", "year": 2011, "plot": "a family moves to the countryside"},
	]


@pytest.fixture
def scenario_engine(scenario_records):
	return RecommenderEngine(scenario_records, rng=np.random.default_rng(7))


@pytest.fixture
def catalog_records():
	return DataLoader().load_records(str(ROOT / 'data' / 'movies.jsonl'))


@pytest.fixture
def catalog_engine(catalog_records):
	return RecommenderEngine(catalog_records, settings=Settings(random_seed=42))
