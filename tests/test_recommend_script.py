"""
Tests for the command-line recommendation script.
"""

import json

import pytest

from cinematch.errors import InitializationFailure
from scripts.recommend import main


@pytest.fixture
def scenario_catalog(tmp_path, monkeypatch, scenario_records):
	path = tmp_path / "movies.jsonl"
	path.write_text("\n".join(json.dumps(record) for record in scenario_records), encoding='utf-8')
	monkeypatch.setenv("CATALOG_PATH", str(path))
	monkeypatch.setenv("RANDOM_SEED", "7")
	return path


def test_title_seed(scenario_catalog):
	payload = main(["Nova"])
	assert payload["reference_title"] == "Nova"
	assert [r["title"] for r in payload["recommendations"]] == ["Quiet Town"]


def test_no_seed_uses_default(scenario_catalog):
	payload = main([])
	assert payload["seed"] == ""
	assert payload["reference_title"] == "Nova"


def test_empty_catalog_fails(tmp_path, monkeypatch):
	path = tmp_path / "movies.json"
	path.write_text("[]", encoding='utf-8')
	monkeypatch.setenv("CATALOG_PATH", str(path))
	with pytest.raises(InitializationFailure):
		main(["Nova"])
