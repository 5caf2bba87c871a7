from __future__ import annotations
from fastapi import APIRouter, Depends, Response, status
from .contracts import (
    LoginRequest, MeResponse, PublicUser, SignupRequest,
    UpdatePasswordRequest, User, UWFResponse,
)
from .deps import get_current_user
from .errors import CredentialServiceError
from .service import AuthService, get_auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _error(response: Response, ex: CredentialServiceError) -> UWFResponse:
    response.status_code = ex.status_code
    return UWFResponse(ok=False, error=ex.payload)


@router.post("/signup", response_model=UWFResponse, status_code=status.HTTP_201_CREATED)
def signup(req: SignupRequest, response: Response, svc: AuthService = Depends(get_auth_service)):
    try:
        return UWFResponse(ok=True, result=svc.signup(req))
    except CredentialServiceError as ex:
        return _error(response, ex)


@router.post("/login", response_model=UWFResponse)
def login(req: LoginRequest, response: Response, svc: AuthService = Depends(get_auth_service)):
    try:
        return UWFResponse(ok=True, result=svc.login(req))
    except CredentialServiceError as ex:
        return _error(response, ex)


@router.put("/password", response_model=UWFResponse)
def update_password(
    req: UpdatePasswordRequest,
    current_user: User = Depends(get_current_user),
    svc: AuthService = Depends(get_auth_service),
):
    svc.update_password(current_user.email, req.new_password)
    return UWFResponse(ok=True)


@router.get("/me", response_model=UWFResponse)
def me(current_user: User = Depends(get_current_user)):
    return UWFResponse(ok=True, result=MeResponse(user=PublicUser.from_user(current_user)))
