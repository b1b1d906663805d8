"""
Data loading and parsing module.
Reads raw catalog records from JSONL/JSON and turns them into normalized Movie objects.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read JSON lines / arrays
from typing import Any, Dict, List, Optional, Sequence  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our Movie data class used across the project
from .models import Movie  # structured movie record

# Console logging
from loguru import logger  # console logger


class DataLoader:
	"""
	Handles loading raw catalog records and parsing them into Movie objects.
	Loading is lenient (bad JSON lines are skipped); parsing is strict, because the
	engine must refuse a malformed catalog rather than serve a partial one.
	"""

	def load_records(self, filepath: str) -> List[Dict[str, Any]]:
		"""
		Load raw records from either a JSON Lines file (.jsonl) or a JSON array file.
		"""
		filepath = Path(filepath)  # normalize path
		if filepath.suffix.lower() == '.jsonl':
			return self.load_records_from_jsonl(str(filepath))
		return self.load_records_from_json(str(filepath))

	def load_records_from_jsonl(self, filepath: str) -> List[Dict[str, Any]]:
		"""
		Load records from a JSON Lines (JSONL) file where each line is one JSON object.
		Returns the raw dictionaries in file order.
		"""
		records = []  # accumulator for raw records
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Catalog file not found: {filepath}")

		logger.info(f"[DataLoader] Loading catalog from {filepath}...")  # log action

		# Read line-by-line; blank lines are ignored, malformed ones are reported and skipped
		with open(filepath, 'r', encoding='utf-8') as f:
			for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
				if not line.strip():  # tolerate trailing newlines
					continue
				try:
					records.append(json.loads(line))  # parse JSON object per line
				except json.JSONDecodeError as e:
					logger.warning(f"[DataLoader] Skipping invalid JSON at line {line_num}: {e}")  # malformed line
					continue  # move on

		logger.info(f"[DataLoader] Loaded {len(records)} raw records.")  # summary
		return records  # return list

	def load_records_from_json(self, filepath: str) -> List[Dict[str, Any]]:
		"""Load records from a file holding a single JSON array of objects."""
		filepath = Path(filepath)
		if not filepath.exists():
			raise FileNotFoundError(f"Catalog file not found: {filepath}")

		logger.info(f"[DataLoader] Loading catalog from {filepath}...")
		with open(filepath, 'r', encoding='utf-8') as f:
			data = json.load(f)
		if not isinstance(data, list):
			raise ValueError(f"Catalog file {filepath} must contain a JSON array of movies")

		logger.info(f"[DataLoader] Loaded {len(data)} raw records.")
		return data

	def parse_movies(self, records: Sequence[Any]) -> List[Movie]:
		"""
		Parse raw records into Movie objects, keeping catalog order.
		Raises ValueError for an empty catalog, a record that is not an object,
		a record without a title, or a title repeated (case-insensitively).
		"""
		if not records:
			raise ValueError("Catalog is empty")

		movies: List[Movie] = []
		seen_titles = set()  # lowercased titles already parsed
		for position, data in enumerate(records):
			if not isinstance(data, dict):
				raise ValueError(f"Catalog record {position} is not an object: {data!r}")
			movie = self._parse_movie_data(data, position)
			key = movie.title.lower()
			if key in seen_titles:
				raise ValueError(f"Duplicate catalog title: {movie.title!r}")
			seen_titles.add(key)
			movies.append(movie)

		logger.debug(f"[DataLoader] Parsed {len(movies)} movies")
		return movies

	def _parse_movie_data(self, data: Dict[str, Any], position: int) -> Movie:
		"""
		Convert a raw dictionary into a Movie, normalizing genres and year.
		"""
		title = str(data.get('title') or '').strip()  # titles are required
		if not title:
			raise ValueError(f"Catalog record {position} has no title")

		raw_genre = data.get('genre') or ''  # delimited string or list of labels
		genres = self._parse_comma_separated(raw_genre)
		genre = raw_genre if isinstance(raw_genre, str) else ', '.join(genres)  # echoed as a delimited string
		year = self._parse_year(data.get('year'))  # numeric year or None

		return Movie(
			title=title,
			plot=str(data.get('plot') or ''),
			genre=genre,
			year=year,
			poster=data.get('poster') or None,
			genres=genres,
			year_value=year,
		)

	def _parse_comma_separated(self, value) -> List[str]:
		"""
		Normalize a value that may be None, a list, or a comma-separated string
		into a list of clean strings, dropping repeats but keeping first-seen order.
		"""
		if value is None:  # missing field
			return []  # treat as empty list
		if isinstance(value, list):  # already a list
			items = [str(item).strip() for item in value if item]  # clean each
		elif isinstance(value, str):  # comma-separated string
			items = [item.strip() for item in value.split(',')]  # split/trim
		else:
			return []  # any other type becomes empty

		unique = []
		for item in items:
			if item and item not in unique:
				unique.append(item)
		return unique

	def _parse_year(self, value) -> Optional[int]:
		"""Return an integer year, or None when the value is missing or not numeric."""
		if value is None or isinstance(value, bool):
			return None
		try:
			return int(float(value))
		except (TypeError, ValueError, OverflowError):
			return None
