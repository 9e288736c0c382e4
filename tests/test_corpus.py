import numpy as np
import pytest

from cluster_lens.core.corpus import TextCleaner, WordFrequencyTable, prepare_corpus
from cluster_lens.core.matrix import EmbeddingMatrix
from cluster_lens.errors import DegenerateInput


@pytest.mark.unit
def test_tokenize_lowercases_and_drops_stopwords(cleaner):
    assert cleaner.tokenize("De Kamer was MOOI en schoon") == ["kamer", "mooi", "schoon"]


@pytest.mark.unit
def test_tokenize_strips_urls_digits_and_punctuation(cleaner):
    text = "Kamer 204, zie https://example.com/foto!! Prijs: 99 euro... top_locatie"
    assert cleaner.tokenize(text) == ["kamer", "zie", "prijs", "euro", "top", "locatie"]


@pytest.mark.unit
def test_tokenize_drops_short_tokens():
    cleaner = TextCleaner(stopwords=[], min_token_length=3)
    assert cleaner.tokenize("ok bed is er top") == ["bed", "top"]


@pytest.mark.unit
def test_tokenize_keeps_accented_letters(cleaner):
    assert cleaner.tokenize("Café très agréable") == ["café", "très", "agréable"]


@pytest.mark.unit
def test_tokenize_non_text(cleaner):
    assert cleaner.tokenize(None) == []
    assert cleaner.tokenize(float("nan")) == []


@pytest.mark.unit
def test_extra_stopwords():
    cleaner = TextCleaner(stopwords=["de"], extra_stopwords=["Hotel"])
    assert cleaner.tokenize("de hotel kamer") == ["kamer"]


@pytest.mark.unit
def test_frequency_table_keeps_first_seen_order():
    table = WordFrequencyTable.from_documents([["mooi", "kamer"], ["kamer", "bed"]])
    assert list(table) == ["mooi", "kamer", "bed"]
    assert table["kamer"] == 2
    assert table.get("zwembad") == 0
    assert "bed" in table
    assert len(table) == 3


@pytest.mark.unit
def test_prepare_corpus_drops_empty_documents(cleaner):
    corpus = prepare_corpus(["Mooie kamer", "de en het", "", "Kamer was schoon"], cleaner)
    assert corpus.documents == (("mooie", "kamer"), ("kamer", "schoon"))
    assert corpus.n_documents == 2
    assert corpus.n_tokens == 4
    assert corpus.word_freq["kamer"] == 2


@pytest.mark.unit
def test_matrix_is_read_only(two_pairs_matrix):
    with pytest.raises(ValueError):
        two_pairs_matrix.vectors[0, 0] = 5.0


@pytest.mark.unit
def test_matrix_copies_input():
    source = np.zeros((2, 3))
    matrix = EmbeddingMatrix(words=("a", "b"), vectors=source)
    source[0, 0] = 1.0
    assert matrix.vectors[0, 0] == 0.0


@pytest.mark.unit
def test_matrix_lookup(two_pairs_matrix):
    assert two_pairs_matrix.dimension == 2
    assert len(two_pairs_matrix) == 4
    assert "c" in two_pairs_matrix
    assert list(two_pairs_matrix.vector("b")) == [0.1, 0.0]
    with pytest.raises(KeyError):
        two_pairs_matrix.vector("zz")


@pytest.mark.unit
def test_matrix_from_mapping():
    matrix = EmbeddingMatrix.from_mapping({"x": np.array([1.0, 2.0]), "y": np.array([3.0, 4.0])})
    assert matrix.words == ("x", "y")
    assert matrix.vectors.shape == (2, 2)


@pytest.mark.unit
@pytest.mark.parametrize(
    "words, vectors",
    [
        (("a", "b"), np.zeros(2)),
        (("a",), np.zeros((2, 3))),
        (("a", "a"), np.zeros((2, 3))),
    ],
)
def test_matrix_rejects_malformed_input(words, vectors):
    with pytest.raises(DegenerateInput):
        EmbeddingMatrix(words=words, vectors=vectors)
