"""User profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, File, Form, Request, UploadFile

from attendly.api.models import ProfilesRequest, ProfileUpdateRequest
from attendly.api.serialization import serialize_profile
from attendly.domain.errors import BadInputError

if TYPE_CHECKING:
    from attendly.containers import AppContainer

router = APIRouter(prefix="/user", tags=["profiles"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/profiles")
async def get_profiles(
    payload: ProfilesRequest, request: Request
) -> dict[str, object]:
    """Return profiles for several users, with defaults for unknown ones."""
    profiles = _container(request).profile_service.get_profiles(payload.user_ids)
    return {
        "success": True,
        "profiles": [serialize_profile(profile) for profile in profiles],
    }


@router.post("/profile/upload")
async def upload_profile_picture(
    request: Request,
    file: UploadFile | None = File(default=None),  # noqa: B008
    user_id: str | None = Form(default=None),
) -> dict[str, object]:
    """Store an uploaded image as the user's profile picture."""
    if file is None or not user_id:
        raise BadInputError("File and user ID are required")
    data = await file.read()
    image_url = _container(request).profile_service.upload_profile_image(
        user_id, file.content_type, data
    )
    return {
        "success": True,
        "image_url": image_url,
        "message": "Profile picture uploaded successfully",
    }


@router.get("/profile/{user_id}")
async def get_profile(user_id: str, request: Request) -> dict[str, object]:
    """Return a user's profile, or an empty default."""
    profile = _container(request).profile_service.get_profile(user_id)
    return {"success": True, "profile": serialize_profile(profile)}


@router.put("/profile/{user_id}")
async def update_profile(
    user_id: str, payload: ProfileUpdateRequest, request: Request
) -> dict[str, object]:
    """Merge profile fields."""
    profile = _container(request).profile_service.update_profile(
        user_id, payload.model_dump(exclude_unset=True)
    )
    return {
        "success": True,
        "message": "Profile updated successfully",
        "profile": serialize_profile(profile),
    }


@router.delete("/profile/{user_id}")
async def delete_profile(user_id: str, request: Request) -> dict[str, object]:
    """Delete a user's profile."""
    _container(request).profile_service.delete_profile(user_id)
    return {"success": True, "message": "Profile deleted successfully"}


@router.delete("/profile/{user_id}/picture")
async def remove_profile_picture(user_id: str, request: Request) -> dict[str, object]:
    """Clear a user's profile picture."""
    _container(request).profile_service.remove_profile_picture(user_id)
    return {"success": True, "message": "Profile picture removed successfully"}
