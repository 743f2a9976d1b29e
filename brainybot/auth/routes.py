"""Auth endpoints: register, login, refresh."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr, Field

from brainybot.services import Services, get_services

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# --- Request / Response schemas ---

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class RefreshRequest(BaseModel):
    refresh_token: str

class TokenResponse(BaseModel):
    status: str = "success"
    data: dict


# --- Endpoints ---

@router.post("/register", status_code=201, response_model=TokenResponse, summary="Register a new user", description="Create a Supabase account and return its session tokens (none while email confirmation is pending).")
async def register(body: RegisterRequest, services: Services = Depends(get_services)):
    return TokenResponse(data=services.auth.sign_up(body.email, body.password))


@router.post("/login", response_model=TokenResponse, summary="Login", description="Authenticate with email and password, returns Supabase access and refresh tokens.")
async def login(body: LoginRequest, services: Services = Depends(get_services)):
    return TokenResponse(data=services.auth.sign_in(body.email, body.password))


@router.post("/refresh", response_model=TokenResponse, summary="Refresh access token", description="Exchange a valid refresh token for a new session.")
async def refresh(body: RefreshRequest, services: Services = Depends(get_services)):
    return TokenResponse(data=services.auth.refresh(body.refresh_token))
