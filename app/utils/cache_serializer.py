"""
Serialization utilities for caching.

Cached values are stored as JSON text so that a snapshot handed out by the
cache can never be mutated by the caller that receives it.
"""

from typing import Any

from orjson import OPT_NON_STR_KEYS, JSONDecodeError
from orjson import dumps as orjson_dumps
from orjson import loads as orjson_loads
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from app.errors.cache import CacheDeserializationError, CacheSerializationError
from app.monitoring.logging import get_logger

logger = get_logger(__name__)


def _default(value: object) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return str(value)


def serialize(value: object) -> str:
    """
    Serialize value to JSON string.

    Pydantic models are dumped in JSON mode using their aliases.

    Raises:
        CacheSerializationError: If serialization fails.
    """
    try:
        return orjson_dumps(value, default=_default, option=OPT_NON_STR_KEYS).decode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        logger.exception("Serialization failed")
        raise CacheSerializationError from e


def deserialize(value: str) -> Any:
    """
    Deserialize JSON string to value.

    Raises:
        CacheDeserializationError: If deserialization fails.
    """
    try:
        return orjson_loads(value)
    except (JSONDecodeError, TypeError) as e:
        logger.exception("Deserialization failed")
        raise CacheDeserializationError from e
