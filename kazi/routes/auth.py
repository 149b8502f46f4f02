from fastapi import APIRouter, Depends

from kazi.dependencies import get_auth_service
from kazi.models.user import User
from kazi.schemas.user import RegisterRequest, LoginRequest, AuthResponse, UserResponse
from kazi.services.auth_service import AuthService
from kazi.logging_config import get_logger
from kazi.utils.jwt import create_access_token

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse)
async def register(
    registration: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Registers a new user.
    Rejects an empty password and an email that is already registered.
    """
    user = User(
        email=registration.email,
        first_name=registration.first_name,
        last_name=registration.last_name,
        gender=registration.gender,
    )
    return await auth_service.register(user, registration.password)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Validates credentials and issues a signed access token carrying the
    user's id and role.
    """
    user = await auth_service.login(credentials.email, credentials.password)
    token = create_access_token(user_id=user.id, role=user.role, email=user.email)
    logger.info(f"User {user.id} logged in")
    return AuthResponse(token=token, user=UserResponse.model_validate(user))
