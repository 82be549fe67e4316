from __future__ import annotations

import logging
from typing import Union

from fastapi import APIRouter, Depends, File, Request, UploadFile
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..errors import MissingName, MissingPayload
from ..media import MediaService

logger = logging.getLogger("mediahub.router.media")

router = APIRouter(prefix="/media", tags=["media"])


def get_media_service(request: Request) -> MediaService:
    return request.app.state.media_service


@router.post(
    "",
    response_model=schemas.UploadResponse,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "No file uploaded"},
        415: {"model": schemas.ErrorResponse, "description": "Content type not allowed"},
        500: {"model": schemas.ErrorResponse, "description": "Storage or metadata failure"},
    },
)
def upload_media(
    request: Request,
    # str is accepted so a text value or a part without a filename reaches
    # the handler and gets the 400 below, not a validation error
    file: Union[UploadFile, str, None] = File(None),
    db: Session = Depends(get_db),
    service: MediaService = Depends(get_media_service),
):
    """
    Store one file from the multipart ``file`` field.

    Runs in FastAPI's thread pool, so the disk write and the insert block
    only this request.
    """
    if file is None or isinstance(file, str) or not file.filename:
        raise MissingPayload()

    stored = service.upload(
        db,
        stream=file.file,
        content_type=file.content_type,
        original_filename=file.filename,
        base_url=str(request.base_url),
    )
    return schemas.UploadResponse(
        file=schemas.FileInfo(name=stored.name, path=stored.path, url=stored.url),
    )


# DELETE /media with no name never reaches the route below
@router.delete("", response_model=schemas.MessageResponse, include_in_schema=False)
def delete_media_without_name():
    raise MissingName()


@router.delete(
    "/{filename}",
    response_model=schemas.MessageResponse,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Missing or invalid filename"},
        404: {"model": schemas.ErrorResponse, "description": "File not found"},
        500: {"model": schemas.ErrorResponse, "description": "Metadata failure"},
    },
)
def delete_media(
    filename: str,
    db: Session = Depends(get_db),
    service: MediaService = Depends(get_media_service),
):
    service.delete(db, filename)
    return schemas.MessageResponse(message="File deleted successfully")
