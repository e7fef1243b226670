"""Registration, login and session endpoints."""

from fastapi import APIRouter, Request, Response, status

from registrar.api.dependencies import SESSION_COOKIE, CurrentIdentityDep, ServicesDep
from registrar.api.models import (
    APIResponse,
    IdentityResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    UserResponse,
    user_to_response,
)
from registrar.api.security import get_client_ip

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=APIResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest, request: Request, services: ServicesDep
) -> APIResponse[UserResponse]:
    """Create an account."""
    user = services.auth.register(
        email=body.email,
        password=body.password,
        name=body.name,
        student_id=body.student_id,
        origin=get_client_ip(request),
    )
    return APIResponse(data=user_to_response(user))


@router.post("/auth/login", response_model=APIResponse[LoginResponse])
def login(
    body: LoginRequest, response: Response, services: ServicesDep
) -> APIResponse[LoginResponse]:
    """Log in and set the session cookie."""
    result = services.auth.login(body.email, body.password)
    response.set_cookie(
        SESSION_COOKIE,
        result.token,
        max_age=services.settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=services.settings.cookie_secure,
        path="/",
    )
    return APIResponse(
        data=LoginResponse(
            user=IdentityResponse.model_validate(result.identity),
            token=result.token,
        )
    )


@router.post("/auth/logout", response_model=APIResponse[MessageResponse])
def logout(response: Response) -> APIResponse[MessageResponse]:
    """Clear the session cookie."""
    response.delete_cookie(SESSION_COOKIE, path="/")
    return APIResponse(data=MessageResponse(message="Logged out"))


@router.get("/auth/session", response_model=APIResponse[IdentityResponse])
def get_session(identity: CurrentIdentityDep) -> APIResponse[IdentityResponse]:
    """Get the authenticated caller."""
    return APIResponse(data=IdentityResponse.model_validate(identity))
