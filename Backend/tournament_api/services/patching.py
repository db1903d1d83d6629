from typing import Any, Sequence, Type, TypeVar
from pydantic import BaseModel, ValidationError
from jsonpointer import JsonPointerException
from tournament_api.core.exceptions import BadRequestException, BusinessRuleException
from tournament_api.schemas.patch import PatchOperation
import jsonpatch
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)


def apply_json_patch(model: Type[ModelType], document: dict[str, Any], operations: Sequence[PatchOperation]) -> ModelType:
    """
    Apply a JSON Patch to ``document`` and validate the result as ``model``.

    Raises:
        BadRequestException: empty patch, or an operation that cannot be applied
        BusinessRuleException: the patched document is not a valid ``model``
    """
    if not operations:
        raise BadRequestException(detail="Patch document must contain at least one operation.")

    try:
        patched = jsonpatch.apply_patch(document, [operation.to_document() for operation in operations])
    except (jsonpatch.JsonPatchException, JsonPointerException) as e:
        logger.warning("Rejected patch document: %s", e)
        raise BadRequestException(detail=f"Invalid patch document: {e}")

    try:
        return model.model_validate(patched)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise BusinessRuleException(detail=f"Patched resource is invalid: {problems}")
