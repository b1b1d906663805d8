"""
Unit tests for FeatureComposer: genre keywords, year normalization, and vector combination.
"""

import numpy as np
import pytest

from cinematch.data_loader import DataLoader
from cinematch.features import METADATA_WEIGHT, FeatureComposer, combine, genre_keywords


def _movies(records):
	return DataLoader().parse_movies(records)


def test_genre_keywords_orthographic_variants_and_synonyms():
	assert set(genre_keywords("Sci-Fi")) >= {"sci-fi", "sci fi", "scifi", "science fiction"}
	assert set(genre_keywords("Science Fiction")) >= {"science fiction", "sci-fi"}
	assert "action and adventure" in genre_keywords("Action & Adventure")
	assert "war politics" in genre_keywords("War/Politics")
	assert set(genre_keywords("Comedy")) == {"comedy", "funny", "humor"}
	assert "scary" in genre_keywords("Horror")
	assert "drama" in genre_keywords("Drama")


def test_query_metadata_infers_genre_and_year(scenario_records):
	composer = FeatureComposer(_movies(scenario_records))
	features, genres, year = composer.query_metadata("a sci-fi signal story from 2005")
	assert genres == ["Sci-Fi"]
	assert year == 2005
	assert features[composer.genre_index["Sci-Fi"]] == 1.0
	assert features[composer.genre_index["Drama"]] == 0.0
	# 2005 lies below the catalog range and is clamped to its start
	assert features[-1] == 0.0


def test_query_metadata_without_signals(scenario_records):
	composer = FeatureComposer(_movies(scenario_records))
	features, genres, year = composer.query_metadata("nothing to see here 1850")
	assert genres == []
	assert year is None
	assert features[-1] == pytest.approx(composer.normalized_mean_year)


def test_item_metadata_flags_and_year(scenario_records):
	composer = FeatureComposer(_movies(scenario_records))
	nova, quiet_town = _movies(scenario_records)
	assert composer.genres == ["Drama", "Sci-Fi"]

	features = composer.item_metadata(nova)
	assert list(features) == [1.0, 1.0, 0.0]

	features = composer.item_metadata(quiet_town)
	assert list(features) == [1.0, 0.0, 1.0]


def test_single_distinct_year_uses_unit_range():
	composer = FeatureComposer(_movies([
		{"title": "A", "genre": "Drama", "year": 2000},
		{"title": "B", "genre": "Drama", "year": 2000},
	]))
	assert composer.year_range == 1.0
	assert composer.normalize_year(2000) == 0.0
	assert composer.normalized_mean_year == 0.0


def test_missing_year_gets_catalog_mean():
	composer = FeatureComposer(_movies([
		{"title": "A", "year": 2000},
		{"title": "B", "year": 2010},
		{"title": "C", "year": None},
	]))
	assert composer.normalized_mean_year == pytest.approx(0.5)
	features = composer.item_metadata(_movies([{"title": "C"}])[0])
	assert features[-1] == pytest.approx(0.5)


def test_catalog_without_years():
	composer = FeatureComposer(_movies([{"title": "A"}, {"title": "B"}]))
	assert composer.normalized_mean_year == 0.5
	assert composer.normalize_year(1999) == 0.5


def test_combine_damps_metadata_and_reports_norm():
	vector, norm = combine(np.array([3.0, 4.0]), np.array([1.0, 0.0]))
	assert list(vector) == pytest.approx([3.0, 4.0, METADATA_WEIGHT, 0.0])
	assert norm == pytest.approx(np.sqrt(25.0 + METADATA_WEIGHT ** 2))


def test_combine_with_empty_latent():
	vector, norm = combine(np.zeros(0), np.array([0.0, 1.0]))
	assert list(vector) == pytest.approx([0.0, METADATA_WEIGHT])
	assert norm == pytest.approx(METADATA_WEIGHT)
