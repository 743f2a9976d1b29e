"""Profile endpoints: read and upsert the student's age and education level."""

import logging

from fastapi import APIRouter, Depends

from brainybot.auth.dependencies import CurrentUser, get_current_user
from brainybot.db.models import EDUCATION_LEVELS
from brainybot.profiles.schemas import ProfileRequest
from brainybot.services import Services, get_services
from brainybot.utils.errors import ClientInputError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/profile", tags=["Profile"])

MIN_AGE = 1
MAX_AGE = 120


def validate_profile(body: ProfileRequest) -> tuple[int, str]:
    if not body.age or not body.education_level:
        raise ClientInputError("Age and education level are required")
    if not MIN_AGE <= body.age <= MAX_AGE:
        raise ClientInputError(f"Age must be between {MIN_AGE} and {MAX_AGE}")
    if body.education_level not in EDUCATION_LEVELS:
        raise ClientInputError(
            "Education level must be one of: " + ", ".join(EDUCATION_LEVELS)
        )
    return body.age, body.education_level


@router.get("", summary="Get profile", description="Returns the user's profile, or null when it has not been set up yet.")
async def get_profile(user: CurrentUser = Depends(get_current_user), services: Services = Depends(get_services)):
    return {"profile": services.profiles.get(user.id)}


@router.api_route("", methods=["POST", "PUT"], summary="Create or update profile", description="Upsert the user's age and education level.")
async def upsert_profile(
    body: ProfileRequest,
    user: CurrentUser = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    age, education_level = validate_profile(body)
    profile = services.profiles.upsert(user.id, age, education_level)
    logger.info("Profile saved for user %s", user.id)
    return {"profile": profile}
