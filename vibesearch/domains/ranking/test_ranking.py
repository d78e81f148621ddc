"""
Tests for sparse encoding, similarity, and ranking.
"""

from __future__ import annotations

import math
from unittest.mock import AsyncMock

import numpy as np
import pytest

from .models import LocationResult, SparseEmbedding
from .ranker import SimilarityRanker
from .similarity import cosine_similarity, sparse_cosine_similarity
from .sparse import SparseEncoder, normalize


def _place(place_id: str, name: str, **kwargs) -> LocationResult:
    return LocationResult(place_id=place_id, name=name, **kwargs)


# --- SparseEmbedding Model Tests ---


def test_sparse_embedding_requires_parallel_arrays() -> None:
    with pytest.raises(ValueError):
        SparseEmbedding(indices=[0, 1], values=[0.5], dimension=4, magnitude=1.0)


def test_sparse_embedding_rejects_out_of_range_index() -> None:
    with pytest.raises(ValueError):
        SparseEmbedding(indices=[4], values=[0.5], dimension=4, magnitude=1.0)


def test_sparse_embedding_sorted_by_index() -> None:
    """Values move in lockstep with their indices."""
    embedding = SparseEmbedding(indices=[3, 0, 2], values=[0.9, -0.5, 0.2], dimension=4, magnitude=1.1)
    ordered = embedding.sorted_by_index()
    assert ordered.indices == [0, 2, 3]
    assert ordered.values == [-0.5, 0.2, 0.9]
    assert ordered.magnitude == embedding.magnitude


def test_sparse_embedding_to_dense() -> None:
    embedding = SparseEmbedding(indices=[2, 0], values=[0.5, -1.0], dimension=4, magnitude=1.2)
    assert embedding.to_dense().tolist() == [-1.0, 0.0, 0.5, 0.0]


# --- SparseEncoder Tests ---


def test_encoder_orders_by_magnitude() -> None:
    encoder = SparseEncoder(max_dimensions=2)
    embedding = encoder.create_sparse_embedding([0.1, -0.9, 0.0, 0.4])
    assert embedding.indices == [1, 3]
    assert embedding.values == [-0.9, 0.4]


def test_encoder_drops_values_at_threshold() -> None:
    """Values with abs value <= threshold are discarded."""
    encoder = SparseEncoder(threshold=0.01)
    embedding = encoder.create_sparse_embedding([0.01, -0.02, 0.005, 0.5])
    assert embedding.indices == [3, 1]
    assert all(abs(v) > 0.01 for v in embedding.values)


def test_encoder_caps_dimensions() -> None:
    """Never more than max_dimensions entries are kept."""
    rng = np.random.default_rng(7)
    dense = rng.normal(size=384)
    embedding = SparseEncoder(max_dimensions=100).create_sparse_embedding(dense)
    assert len(embedding.indices) == len(embedding.values) == 100
    assert embedding.dimension == 384


def test_encoder_magnitude_is_full_vector_norm() -> None:
    """Magnitude reflects the untruncated vector."""
    rng = np.random.default_rng(11)
    dense = rng.normal(size=384)
    for max_dimensions in (1, 10, 100, 384):
        embedding = SparseEncoder(max_dimensions=max_dimensions).create_sparse_embedding(dense)
        assert math.isclose(embedding.magnitude, float(np.linalg.norm(dense)))


def test_encoder_zero_vector() -> None:
    embedding = SparseEncoder().create_sparse_embedding([0.0, 0.0, 0.0])
    assert embedding.indices == []
    assert embedding.magnitude == 0.0
    assert embedding.dimension == 3


def test_encoder_rejects_non_positive_cap() -> None:
    with pytest.raises(ValueError):
        SparseEncoder(max_dimensions=0)


def test_normalize() -> None:
    assert np.allclose(normalize([3.0, 4.0]), [0.6, 0.8])
    assert normalize([0.0, 0.0]).tolist() == [0.0, 0.0]


# --- Dense Similarity Tests ---


def test_cosine_similarity_symmetric_and_bounded() -> None:
    rng = np.random.default_rng(3)
    for _ in range(20):
        a = rng.normal(size=16)
        b = rng.normal(size=16)
        forward = cosine_similarity(a, b)
        assert forward == pytest.approx(cosine_similarity(b, a))
        assert 0.0 <= forward <= 1.0


def test_cosine_similarity_identical() -> None:
    assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)


def test_cosine_similarity_opposite_clamps_to_zero() -> None:
    assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == 0.0


def test_cosine_similarity_dimension_mismatch_is_zero() -> None:
    """Mismatched lengths score 0 instead of raising."""
    assert cosine_similarity([1.0, 0.0, 0.0], [1.0, 0.0]) == 0.0


def test_cosine_similarity_zero_vector() -> None:
    assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0


# --- Sparse Similarity Tests ---


def test_sparse_similarity_counts_all_shared_dimensions() -> None:
    """Magnitude-ordered indices still align during the merge."""
    encoder = SparseEncoder()
    a = [0.1, 0.0, 0.9, 0.3]
    b = [0.8, 0.0, 0.2, 0.5]
    sparse = sparse_cosine_similarity(
        encoder.create_sparse_embedding(a),
        encoder.create_sparse_embedding(b),
    )
    assert sparse == pytest.approx(cosine_similarity(a, b))


def test_sparse_similarity_dimension_mismatch_is_zero() -> None:
    a = SparseEmbedding(indices=[0], values=[1.0], dimension=2, magnitude=1.0)
    b = SparseEmbedding(indices=[0], values=[1.0], dimension=3, magnitude=1.0)
    assert sparse_cosine_similarity(a, b) == 0.0


def test_sparse_similarity_zero_magnitude() -> None:
    a = SparseEmbedding(indices=[], values=[], dimension=2, magnitude=0.0)
    b = SparseEmbedding(indices=[0], values=[1.0], dimension=2, magnitude=1.0)
    assert sparse_cosine_similarity(a, b) == 0.0


def test_sparse_matches_dense_for_concentrated_vectors() -> None:
    """Decoded sparse vectors agree with dense similarity when energy is in the top components."""
    rng = np.random.default_rng(42)
    encoder = SparseEncoder(max_dimensions=100)
    for _ in range(10):
        a = np.zeros(384)
        b = np.zeros(384)
        support = rng.choice(384, size=60, replace=False)
        a[support] = rng.normal(size=60)
        b[support] = a[support] + rng.normal(scale=0.3, size=60)
        # low-energy tail below the threshold
        a += rng.uniform(-5e-4, 5e-4, size=384)
        b += rng.uniform(-5e-4, 5e-4, size=384)

        sparse_a = encoder.create_sparse_embedding(a)
        sparse_b = encoder.create_sparse_embedding(b)
        dense = cosine_similarity(a, b)
        assert sparse_cosine_similarity(sparse_a, sparse_b) == pytest.approx(dense, abs=1e-3)
        assert cosine_similarity(sparse_a.to_dense(), sparse_b.to_dense()) == pytest.approx(dense, abs=1e-3)


# --- LocationResult Tests ---


def test_location_result_to_text() -> None:
    place = _place(
        "p1",
        "Blue Bottle",
        description="Coffee & Tea",
        formatted_address="66 Mint St",
        types=["coffee", "cafes"],
        rating=4.5,
    )
    assert place.to_text() == "Blue Bottle Coffee & Tea 66 Mint St coffee, cafes rating 4.5"


def test_location_result_is_frozen() -> None:
    place = _place("p1", "Blue Bottle")
    with pytest.raises(Exception):
        place.name = "changed"  # type: ignore


def test_location_result_with_score_copies() -> None:
    place = _place("p1", "Blue Bottle")
    scored = place.with_score(0.7)
    assert scored.similarity_score == 0.7
    assert place.similarity_score is None


# --- SimilarityRanker Tests ---


@pytest.fixture
def vector_oracle() -> AsyncMock:
    """Oracle returning fixed vectors per candidate name."""
    vectors = {
        "Quiet Library Cafe": [1.0, 0.0, 0.0],
        "Loud Sports Bar": [0.0, 1.0, 0.0],
        "Study Hall": [0.9, 0.1, 0.0],
        "Twin A": [0.0, 0.0, 1.0],
        "Twin B": [0.0, 0.0, 1.0],
    }

    async def embed(text: str) -> list[float]:
        for name, vector in vectors.items():
            if text.startswith(name):
                return vector
        return [0.0, 0.0, 0.0]

    oracle = AsyncMock()
    oracle.embed.side_effect = embed
    return oracle


@pytest.mark.parametrize("use_sparse", [True, False])
async def test_rank_orders_by_similarity(vector_oracle: AsyncMock, use_sparse: bool) -> None:
    ranker = SimilarityRanker(vector_oracle, use_sparse=use_sparse)
    candidates = [
        _place("2", "Loud Sports Bar"),
        _place("3", "Study Hall"),
        _place("1", "Quiet Library Cafe"),
    ]
    ranked = await ranker.rank_by_similarity([2.0, 0.0, 0.0], candidates)

    assert [p.place_id for p in ranked] == ["1", "3", "2"]
    assert ranked[0].similarity_score == pytest.approx(1.0)
    assert ranked[-1].similarity_score == 0.0
    assert vector_oracle.embed.await_count == 3


async def test_rank_truncates_to_top_k(vector_oracle: AsyncMock) -> None:
    ranker = SimilarityRanker(vector_oracle, top_k=5)
    candidates = [_place(str(i), f"Place {i}") for i in range(8)]
    ranked = await ranker.rank_by_similarity([1.0, 0.0, 0.0], candidates)
    assert len(ranked) == 5


async def test_rank_ties_keep_candidate_order(vector_oracle: AsyncMock) -> None:
    ranker = SimilarityRanker(vector_oracle)
    candidates = [_place("b", "Twin B"), _place("a", "Twin A")]
    ranked = await ranker.rank_by_similarity([0.0, 0.0, 1.0], candidates)
    assert [p.place_id for p in ranked] == ["b", "a"]


async def test_rank_empty_candidates(vector_oracle: AsyncMock) -> None:
    ranker = SimilarityRanker(vector_oracle)
    assert await ranker.rank_by_similarity([1.0, 0.0, 0.0], []) == []
    vector_oracle.embed.assert_not_called()


async def test_rank_dimension_mismatch_scores_zero(vector_oracle: AsyncMock) -> None:
    """A candidate embedding of the wrong size degrades to score 0."""
    ranker = SimilarityRanker(vector_oracle, use_sparse=False)
    ranked = await ranker.rank_by_similarity([1.0, 0.0], [_place("1", "Quiet Library Cafe")])
    assert ranked[0].similarity_score == 0.0
