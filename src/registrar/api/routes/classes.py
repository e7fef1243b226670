"""Class catalog endpoints."""

from fastapi import APIRouter

from registrar.api.dependencies import ServicesDep
from registrar.api.models import APIResponse, ClassResponse

router = APIRouter(prefix="/classes", tags=["classes"])


@router.get("", response_model=APIResponse[list[ClassResponse]])
def list_classes(services: ServicesDep) -> APIResponse[list[ClassResponse]]:
    """List all offered classes."""
    classes = services.catalog.list_classes()
    return APIResponse(data=[ClassResponse.model_validate(c) for c in classes])


@router.get("/{class_id}", response_model=APIResponse[ClassResponse])
def get_class(class_id: str, services: ServicesDep) -> APIResponse[ClassResponse]:
    """Get a class by ID."""
    return APIResponse(data=ClassResponse.model_validate(services.catalog.require(class_id)))
