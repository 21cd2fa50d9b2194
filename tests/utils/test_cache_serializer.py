"""Tests for cache serialization."""

from decimal import Decimal

import pytest

from app.errors import CacheDeserializationError, CacheSerializationError
from app.schemas import SkillResponse
from app.utils.cache_serializer import deserialize, serialize


def test_models_use_aliases() -> None:
    skill = SkillResponse(id=1, name="Go", level="Advanced", portfolio_user_id=2)

    assert deserialize(serialize([skill])) == [
        {"id": 1, "name": "Go", "level": "Advanced", "portfolioUserId": 2},
    ]


def test_unknown_types_fall_back_to_str() -> None:
    assert deserialize(serialize({"price": Decimal("1.50")})) == {"price": "1.50"}


def test_oversized_int_raises() -> None:
    with pytest.raises(CacheSerializationError):
        serialize(2**70)


def test_corrupt_payload_raises() -> None:
    with pytest.raises(CacheDeserializationError):
        deserialize("{not json")
