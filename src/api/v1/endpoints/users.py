import structlog
from fastapi import APIRouter, Depends, HTTPException

from ...dependencies import get_current_user, get_user_service
from ..schemas import (
    SignupRequest,
    SignupResponse,
    LoginRequest,
    LoginResponse,
    PreferencesResponse,
    PreferencesUpdateRequest,
    PreferencesUpdateResponse,
    UserResponse,
)
from ....exceptions import (
    DatabaseError,
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from ....models.user import User
from ....services.user_service import UserService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/signup", response_model=SignupResponse)
async def signup(
    request: SignupRequest,
    user_service: UserService = Depends(get_user_service)
):
    try:
        user = user_service.signup(
            name=request.name,
            email=request.email,
            password=request.password,
            preferences=request.preferences,
        )
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except DatabaseError as e:
        logger.error("signup_failed", email=request.email, error=e.message)
        raise HTTPException(status_code=500, detail="Internal server error")

    return SignupResponse(
        message="User created successfully",
        user=UserResponse(**user.to_dict())
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    user_service: UserService = Depends(get_user_service)
):
    try:
        token = user_service.login(request.email, request.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=e.message)

    return LoginResponse(message="Login successful", token=token)


@router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences(current_user: User = Depends(get_current_user)):
    return PreferencesResponse(preferences=list(current_user.preferences or []))


@router.put("/preferences", response_model=PreferencesUpdateResponse)
async def update_preferences(
    request: PreferencesUpdateRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    try:
        user = user_service.update_preferences(current_user.user_id, request.preferences)
    except UserNotFoundError as e:
        logger.warning("preferences_update_user_missing", user_id=current_user.user_id)
        raise HTTPException(status_code=404, detail=e.message)
    except DatabaseError as e:
        logger.error("preferences_update_failed", user_id=current_user.user_id, error=e.message)
        raise HTTPException(status_code=500, detail="Internal server error")

    return PreferencesUpdateResponse(
        message="Preferences updated successfully",
        preferences=list(user.preferences or [])
    )
