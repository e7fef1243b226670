"""Enrollment endpoints. Every route requires an authenticated caller."""

from fastapi import APIRouter, Request, Response, status

from registrar.api.dependencies import CurrentIdentityDep, ServicesDep
from registrar.api.models import (
    APIResponse,
    EnrollActionResponse,
    EnrollmentActionRequest,
    EnrollmentResponse,
    UnenrollRequest,
    enrollment_to_response,
)
from registrar.api.security import get_client_ip

router = APIRouter(prefix="/enrollments", tags=["enrollments"])


@router.get("", response_model=APIResponse[list[EnrollmentResponse]])
def list_enrollments(
    identity: CurrentIdentityDep, services: ServicesDep
) -> APIResponse[list[EnrollmentResponse]]:
    """List the caller's active enrollments."""
    enrollments = services.enrollment.list_my_enrollments(identity)
    return APIResponse(data=[enrollment_to_response(e) for e in enrollments])


@router.post(
    "",
    response_model=APIResponse[EnrollActionResponse],
    status_code=status.HTTP_201_CREATED,
)
def enrollment_action(
    body: EnrollmentActionRequest,
    request: Request,
    response: Response,
    identity: CurrentIdentityDep,
    services: ServicesDep,
) -> APIResponse[EnrollActionResponse]:
    """Enroll in or leave a class by ID.

    A repeated enroll succeeds with 200 and ``already_enrolled`` set.
    """
    if body.action == "unenroll":
        dropped = services.enrollment.unenroll(identity, body.class_id)
        response.status_code = status.HTTP_200_OK
        return APIResponse(
            data=EnrollActionResponse(
                message="Successfully unenrolled from class",
                class_id=dropped.class_id,
                class_name=dropped.class_name,
            )
        )

    outcome = services.enrollment.enroll_by_id(
        identity, body.class_id, origin=get_client_ip(request)
    )
    if outcome.already_enrolled:
        response.status_code = status.HTTP_200_OK
        message = "You are already enrolled in this class"
    else:
        message = "Successfully enrolled in class"
    return APIResponse(
        data=EnrollActionResponse(
            message=message,
            class_id=outcome.class_id,
            class_name=outcome.class_name,
            already_enrolled=outcome.already_enrolled,
        )
    )


@router.delete("", response_model=APIResponse[EnrollActionResponse])
def unenroll(
    body: UnenrollRequest, identity: CurrentIdentityDep, services: ServicesDep
) -> APIResponse[EnrollActionResponse]:
    """Leave a class by ID or display name."""
    dropped = services.enrollment.unenroll(identity, body.class_name)
    return APIResponse(
        data=EnrollActionResponse(
            message="Successfully unenrolled from class",
            class_id=dropped.class_id,
            class_name=dropped.class_name,
        )
    )
