"""Profile picture upload endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile
from starlette.concurrency import run_in_threadpool

from src.api.dependencies import get_current_user, get_picture_service
from src.errors import BadInput
from src.models.user import User
from src.schemas.common import MessageResponse
from src.schemas.upload import PictureInfoResponse, PictureUploadResponse
from src.services.picture_service import PictureService

router = APIRouter(prefix="/api/upload", tags=["upload"])


@router.post("/profile-picture", response_model=PictureUploadResponse)
async def upload_profile_picture(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    pictures: Annotated[PictureService, Depends(get_picture_service)],
    image: Annotated[UploadFile | None, File(description="Profile picture image")] = None,
):
    """Upload, square-crop and store a profile picture.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    if image is None:
        raise BadInput("Please upload an image file", title="No file uploaded")

    # Read one byte past the ceiling so oversized files are detectable
    data = await image.read(pictures.max_bytes + 1)
    # Decode, resize and write off the event loop
    picture = await run_in_threadpool(pictures.process, current_user.id, data, image.content_type)

    return PictureUploadResponse(
        message="Profile picture uploaded successfully",
        image_url=str(request.url_for("uploads", path=picture.filename)),
        filename=picture.filename,
    )


@router.get("/profile-picture/{filename}", response_model=PictureInfoResponse)
def get_profile_picture_info(
    filename: str,
    pictures: Annotated[PictureService, Depends(get_picture_service)],
):
    """Get stored file details."""
    return PictureInfoResponse(**pictures.describe(filename))


@router.delete("/profile-picture/{filename}", response_model=MessageResponse)
def delete_profile_picture(
    filename: str,
    current_user: Annotated[User, Depends(get_current_user)],
    pictures: Annotated[PictureService, Depends(get_picture_service)],
):
    """Delete one of the current user's pictures."""
    pictures.delete(current_user.id, filename)
    return MessageResponse(message="File deleted successfully")
