"""
Text vectorization module.
Tokenizes free text and turns it into TF-IDF weighted term vectors over the catalog vocabulary.
"""

# Regex for tokenization
import re  # split on non-alphanumerics
# Import NumPy for the dense term vectors and the document matrix
import numpy as np  # efficient numeric arrays
# Import typing helpers for clear API contracts
from typing import Dict, Iterable, List, Sequence, Tuple  # type hints

# Import loguru for consistent console logging
from loguru import logger  # console logger

# Lowercase alphanumeric runs; everything else separates tokens
TOKEN_PATTERN = re.compile(r"[a-z0-9]+")


def tokenize(text: str) -> List[str]:
	"""Lowercase the text and return its alphanumeric tokens in order."""
	if not text:  # None or empty
		return []
	return TOKEN_PATTERN.findall(text.lower())


class TextVectorizer:
	"""
	Builds a sorted vocabulary and IDF weights from the catalog, then converts any
	token list into a weighted term vector. Immutable once fitted.
	"""

	def __init__(self):
		self.vocabulary: List[str] = []  # tokens in position order
		self.positions: Dict[str, int] = {}  # token -> column position
		self.idf: np.ndarray = np.zeros(0)  # inverse document frequency per position
		self.document_count = 0  # N used in the IDF formula

	@property
	def vocab_size(self) -> int:
		return len(self.vocabulary)

	def fit(self, documents: Sequence[Sequence[str]]) -> 'TextVectorizer':
		"""
		Learn the vocabulary and IDF weights from tokenized documents (one per catalog item).
		IDF uses the smoothed form ln((1 + N) / (1 + df)) + 1.
		"""
		document_frequency: Dict[str, int] = {}  # token -> number of documents containing it
		for tokens in documents:  # iterate catalog documents
			for token in set(tokens):  # count each token once per document
				document_frequency[token] = document_frequency.get(token, 0) + 1

		# Sorted order keeps positions deterministic for the same catalog
		self.vocabulary = sorted(document_frequency)
		self.positions = {token: position for position, token in enumerate(self.vocabulary)}
		self.document_count = len(documents)

		counts = np.array([document_frequency[token] for token in self.vocabulary], dtype=np.float64)
		self.idf = np.log((1.0 + self.document_count) / (1.0 + counts)) + 1.0

		logger.info(f"[Vectorizer] Vocabulary ready: {self.vocab_size} terms from {self.document_count} documents")
		return self

	def vectorize(self, tokens: Iterable[str]) -> Tuple[np.ndarray, List[Tuple[int, float]]]:
		"""
		Convert tokens into (dense vector, sparse entries).
		Term frequency is dampened as 1 + ln(count); tokens outside the vocabulary are ignored.
		Entries keep the order in which positions were first seen.
		"""
		counts: Dict[int, int] = {}  # position -> raw count (insertion ordered)
		for token in tokens:
			position = self.positions.get(token)
			if position is not None:
				counts[position] = counts.get(position, 0) + 1

		dense = np.zeros(self.vocab_size, dtype=np.float64)
		entries: List[Tuple[int, float]] = []
		for position, count in counts.items():
			weight = (1.0 + np.log(count)) * self.idf[position]
			dense[position] = weight
			entries.append((position, float(weight)))

		return dense, entries

	def vectorize_text(self, text: str) -> Tuple[np.ndarray, List[Tuple[int, float]]]:
		"""Tokenize then vectorize a piece of free text."""
		return self.vectorize(tokenize(text))

	def document_matrix(self, documents: Sequence[Sequence[str]]) -> np.ndarray:
		"""
		Stack the dense vectors of the given tokenized documents into an
		(items x vocabulary) matrix, one row per document in input order.
		"""
		matrix = np.zeros((len(documents), self.vocab_size), dtype=np.float64)
		for row, tokens in enumerate(documents):
			matrix[row] = self.vectorize(tokens)[0]
		return matrix
