"""Helpers shared by the resolvers for turning CMS payloads into models."""
from typing import Any, Iterable, List, Optional, Type, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_one(model: Type[ModelT], record: Any) -> Optional[ModelT]:
    """Validate a single record, logging and returning None when it is unusable."""
    if record is None:
        return None
    try:
        return model.model_validate(record)
    except ValidationError as e:
        logger.warning(
            "Skipping invalid CMS record",
            model=model.__name__,
            errors=e.error_count(),
            detail=str(e),
        )
        return None


def parse_many(model: Type[ModelT], records: Iterable[Any]) -> List[ModelT]:
    """Validate records in order, dropping any that fail validation."""
    parsed = []
    for record in records:
        item = parse_one(model, record)
        if item is not None:
            parsed.append(item)
    return parsed


class LookupStrategy:
    """One way of turning a routing key into a record."""

    name = "base"

    async def lookup(self, client: Any, key: str) -> Optional[BaseModel]:
        raise NotImplementedError
