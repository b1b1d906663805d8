"""
Warm up the recommender and print recommendations for a seed.

This script:
1) Loads the catalog (CATALOG_PATH, default data/movies.jsonl)
2) Initializes the engine (vocabulary, factorization, item vectors)
3) Lists the catalog and the default seed
4) Ranks the catalog for the given seed

Usage:
    python -m scripts.recommend "space exploration sci-fi from 2014"
    python -m scripts.recommend Inception

With no seed, the default (first) catalog movie is used.
"""

import argparse  # command-line arguments
import time  # measure step timings

from loguru import logger  # console logging

from cinematch.config import Settings, configure_logging  # settings and log sink
from cinematch.data_loader import DataLoader  # data ingestion
from cinematch.engine import RecommenderEngine  # recommender core


def main(argv=None):
	parser = argparse.ArgumentParser(description="Recommend catalog movies for a title or description.")
	parser.add_argument('seed', nargs='*', help="catalog title or free-text description")
	args = parser.parse_args(argv)
	seed = ' '.join(args.seed)

	settings = Settings.from_env()
	configure_logging(settings.log_level)

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("CineMatch Recommendations")
	logger.info("=" * 60)

	# 1) Load data
	logger.info("[1/4] Loading catalog...")
	records = DataLoader().load_records(settings.catalog_path)
	logger.info(f"[OK] Loaded {len(records)} records")

	# 2) Initialize engine
	logger.info("[2/4] Initializing engine...")
	t0 = time.time()
	engine = RecommenderEngine(records, settings=settings)
	summary = engine.get_catalog_summary()  # raises InitializationFailure on a bad catalog
	logger.info(f"[OK] Engine ready in {time.time() - t0:.2f}s")

	# 3) Catalog overview
	logger.info(f"[3/4] Catalog has {len(summary['items'])} movies; default seed is '{summary['default_seed']}'")

	# 4) Recommend
	logger.info(f"[4/4] Recommending for seed '{seed}'...")
	payload = engine.recommend(seed)
	logger.info(
		f"Reference: {payload['reference_title']} | genres={payload['profile']['categories']} | year={payload['profile']['year']}"
	)
	for i, item in enumerate(payload['recommendations'], 1):
		logger.info(f"  {i}. [{item['score']:.4f}] {item['title']} ({item['year']}) - {item['insight']}")

	logger.info("=" * 60)
	return payload


if __name__ == '__main__':
	main()  # invoke recommender
