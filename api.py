"""
FastAPI server exposing the movie recommender.
Endpoints:
- GET /health: ready (200), initializing (202), or error (500)
- GET /movies: catalog listing with the default seed
- GET /recommendations?seed=...: ranked, explained recommendations

Startup reads the catalog once; the engine itself initializes lazily on the first request.
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from fastapi.responses import JSONResponse  # explicit status codes
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for configuration, loading, and recommending
from cinematch.config import Settings, configure_logging  # env-driven settings
from cinematch.data_loader import DataLoader  # reads the catalog file
from cinematch.engine import RecommenderEngine  # core recommender
from cinematch.errors import InitializationFailure  # cached engine failure

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="CineMatch Recommender API", version="1.0.0")  # web app

# Global that holds the engine instance created at startup
ENGINE: Optional[RecommenderEngine] = None  # set by the startup hook


# Pydantic model for one catalog entry in the listing
class MovieSummaryOut(BaseModel):
	title: str  # catalog title
	category: str  # raw genre string
	year: Optional[int] = None  # release year if known


# Pydantic model for the catalog listing payload
class CatalogOut(BaseModel):
	items: List[MovieSummaryOut]  # all catalog movies in order
	default_seed: str  # title used for the default view


# Pydantic model for a single recommended movie
class RecommendationOut(BaseModel):
	title: str
	plot: str
	category: str
	year: Optional[int] = None
	image: Optional[str] = None
	score: float  # cosine similarity rounded to 4 decimals
	insight: str  # short explanation


# Pydantic model for the query profile the ranking used
class ProfileOut(BaseModel):
	categories: List[str]
	year: Optional[int] = None


# Pydantic model for the complete recommendation payload
class RecommendationsOut(BaseModel):
	seed: str  # trimmed seed
	reference_title: Optional[str] = None  # catalog movie the seed resolved to
	recommendations: List[RecommendationOut]  # ranked items
	profile: ProfileOut  # genres/year that drove the ranking


# FastAPI startup hook to read the catalog and create the engine once
@app.on_event("startup")
def startup_event():
	"""Load settings and catalog records, then create the (not yet initialized) engine."""
	global ENGINE  # refer to module-level global
	start = time.time()  # start timer

	settings = Settings.from_env()  # read environment
	configure_logging(settings.log_level)  # console sink at configured level
	logger.info(f"[API] Startup: reading catalog from {settings.catalog_path}...")

	try:
		records = DataLoader().load_records(settings.catalog_path)  # read dataset once
	except (OSError, ValueError) as e:  # missing file, bad JSON, or not an array
		logger.error(f"[API] Could not read catalog {settings.catalog_path}: {e}")
		ENGINE = RecommenderEngine([], settings=settings, load_error=e)  # reports the error via /health
		return

	ENGINE = RecommenderEngine(records, settings=settings)  # lazy engine
	logger.info(f"[API] Startup complete in {time.time() - start:.2f}s with {len(records)} records")


def _engine() -> RecommenderEngine:
	if ENGINE is None:  # startup hook has not run
		raise HTTPException(status_code=503, detail="Engine not loaded")
	return ENGINE


# Health endpoint for readiness checks
@app.get("/health")
def health():
	"""Map engine health onto HTTP status codes."""
	status = _engine().get_health()
	code = {'ready': 200, 'initializing': 202}.get(status['status'], 500)
	return JSONResponse(status_code=code, content=status)


# Catalog listing endpoint
@app.get("/movies", response_model=CatalogOut)
def movies():
	"""Return the catalog summary and default seed."""
	try:
		return _engine().get_catalog_summary()
	except InitializationFailure as e:
		logger.error(f"[API] Failed to retrieve movie summary: {e}")
		return JSONResponse(status_code=500, content={'error': str(e)})


# Main recommendation endpoint
@app.get("/recommendations", response_model=RecommendationsOut)
def recommendations(seed: str = Query('', description="Catalog title or free-text description")):
	"""Recommend movies similar to a title or description."""
	start = time.time()  # start timer
	try:
		payload = _engine().recommend(seed)
	except InitializationFailure as e:
		logger.error(f"[API] Failed to produce recommendations: {e}")
		return JSONResponse(status_code=500, content={'error': 'Unable to generate recommendations at this time.'})

	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /recommendations served {len(payload['recommendations'])} results in {elapsed_ms:.2f} ms")
	return payload
