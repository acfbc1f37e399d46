"""Admin login and password change."""

from fastapi import APIRouter, Depends

from ..core.dependencies import get_auth_service, get_current_admin
from ..schemas.auth import ChangePasswordRequest, LoginRequest, LoginResponse, MessageResponse
from ..services.admin_service import AuthService

router = APIRouter(prefix="/api/admin", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Exchange the admin username and password for a one-day bearer token."""
    token = await auth.login(request.username, request.password)
    return LoginResponse(token=token)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    admin_id: str = Depends(get_current_admin),
    auth: AuthService = Depends(get_auth_service),
):
    """Change the admin password. Requires a valid bearer token."""
    await auth.change_password(admin_id, request.old_password, request.new_password)
    return MessageResponse(message="Password changed successfully")
