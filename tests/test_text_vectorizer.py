"""
Unit tests for tokenization and TF-IDF vectorization.
"""

import math

import numpy as np
import pytest

from cinematch.text_vectorizer import TextVectorizer, tokenize


def test_tokenize_splits_on_non_alphanumerics():
	assert tokenize("Sci-Fi, DRAMA & 2049!") == ["sci", "fi", "drama", "2049"]
	assert tokenize("") == []
	assert tokenize(None) == []
	assert tokenize("  --  ") == []


def test_vocabulary_is_sorted_and_positions_stable():
	docs = [tokenize("zebra apple"), tokenize("mango apple")]
	first = TextVectorizer().fit(docs)
	second = TextVectorizer().fit(list(reversed(docs)))
	assert first.vocabulary == ["apple", "mango", "zebra"]
	assert first.positions == second.positions


def test_idf_formula():
	vectorizer = TextVectorizer().fit([["a", "b"], ["a"], ["a", "c"]])
	n = 3
	assert vectorizer.idf[vectorizer.positions["a"]] == pytest.approx(math.log((1 + n) / (1 + 3)) + 1)
	assert vectorizer.idf[vectorizer.positions["b"]] == pytest.approx(math.log((1 + n) / (1 + 1)) + 1)


def test_term_frequency_is_log_scaled_and_unknown_tokens_ignored():
	vectorizer = TextVectorizer().fit([["signal", "pilot"], ["family"]])
	dense, entries = vectorizer.vectorize(["signal", "signal", "signal", "unknown"])
	position = vectorizer.positions["signal"]
	expected = (1 + math.log(3)) * vectorizer.idf[position]
	assert entries == [(position, pytest.approx(expected))]
	assert dense[position] == pytest.approx(expected)
	assert np.count_nonzero(dense) == 1


def test_text_with_no_known_tokens():
	vectorizer = TextVectorizer().fit([["signal"]])
	dense, entries = vectorizer.vectorize_text("zzqx blorf")
	assert entries == []
	assert not dense.any()


def test_document_matrix_rows_follow_input_order():
	docs = [tokenize("pilot signal"), tokenize("family countryside")]
	vectorizer = TextVectorizer().fit(docs)
	matrix = vectorizer.document_matrix(docs)
	assert matrix.shape == (2, 4)
	assert matrix[0, vectorizer.positions["pilot"]] > 0
	assert matrix[1, vectorizer.positions["pilot"]] == 0


def test_empty_vocabulary():
	vectorizer = TextVectorizer().fit([[], []])
	assert vectorizer.vocab_size == 0
	dense, entries = vectorizer.vectorize_text("anything")
	assert dense.shape == (0,)
	assert entries == []
