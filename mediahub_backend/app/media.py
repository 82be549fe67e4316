"""Upload / delete workflow.

Each operation touches two stores in a fixed order: the content directory
first, then the ``uploads`` table. There is no transaction spanning both, so
a failure in the second step leaves a divergence behind:

- upload: file written, row insert failed -> ``orphaned file``
- delete: file removed, row delete failed -> ``orphaned record``

Both are logged with those exact prefixes so they can be found and repaired
out of band; ``MediaService.reconcile`` reports them on demand.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models, schemas
from .errors import (
    MetadataFailure,
    MissingName,
    MissingPayload,
    NotFound,
    StorageDeleteFailure,
    StorageWriteFailure,
    UnsupportedMediaType,
)
from .naming import generate_storage_name
from .storage import MediaStorage

logger = logging.getLogger("mediahub.media")

ALLOWED_CONTENT_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "video/mp4",
    "video/x-msvideo",  # AVI
    "video/quicktime",  # MOV
    "audio/mpeg",
})

PUBLIC_PREFIX = "/uploads/"


@dataclass(frozen=True)
class StoredMedia:
    name: str
    path: str
    url: str


class MediaService:
    def __init__(self, storage: MediaStorage, public_base_url: Optional[str] = None):
        self.storage = storage
        self.public_base_url = public_base_url

    def public_url(self, name: str, base_url: str) -> str:
        base = (self.public_base_url or base_url).rstrip("/")
        return f"{base}{PUBLIC_PREFIX}{name}"

    def upload(
        self,
        db: Session,
        stream: Optional[BinaryIO],
        content_type: Optional[str],
        original_filename: Optional[str],
        base_url: str,
    ) -> StoredMedia:
        """
        Validate -> generate name -> write file -> insert row.

        Validation failures raise before anything is written. A failed write
        never reaches the insert.
        """
        if stream is None or not original_filename:
            raise MissingPayload()
        if content_type not in ALLOWED_CONTENT_TYPES:
            logger.info("Rejected upload %r with content type %r", original_filename, content_type)
            raise UnsupportedMediaType(f"Received content type: {content_type}")

        name = generate_storage_name(original_filename)

        try:
            path = self.storage.save(stream, name)
        except OSError as e:
            logger.exception("Failed to write uploaded file %s to disk: %s", name, e)
            raise StorageWriteFailure(str(e))

        try:
            db.add(models.Upload(file_name=name, file_path=str(path)))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                "orphaned file: metadata insert failed storage_name=%s path=%s error=%s",
                name, path, e,
            )
            raise MetadataFailure(str(e))

        logger.info("Stored %s (%s) as %s", original_filename, content_type, name)
        return StoredMedia(name=name, path=str(path), url=self.public_url(name, base_url))

    def delete(self, db: Session, name: Optional[str]) -> None:
        """
        Remove file -> delete row(s).

        The row is only touched once the file is really gone; if the unlink
        fails the caller gets ``NotFound`` and the table is left as is.
        """
        if name is None or not name.strip():
            raise MissingName()

        # raises InvalidName before any side effect
        self.storage.resolve(name)

        try:
            self.storage.remove(name)
        except FileNotFoundError as e:
            raise NotFound(str(e))
        except OSError as e:
            logger.error("Could not remove stored file %s: %s", name, e)
            raise StorageDeleteFailure(str(e))

        try:
            deleted = (
                db.query(models.Upload)
                .filter(models.Upload.file_name == name)
                .delete(synchronize_session=False)
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                "orphaned record: metadata delete failed storage_name=%s error=%s",
                name, e,
            )
            raise MetadataFailure(str(e))

        if not deleted:
            logger.warning("Deleted %s from disk but it had no uploads row", name)
        logger.info("Deleted %s", name)

    def reconcile(self, db: Session) -> schemas.ReconcileReport:
        """Compare the content directory with the uploads table. Read-only."""
        self.storage.ensure_dir()
        on_disk = set(self.storage.list_names())
        recorded = {row.file_name for row in db.query(models.Upload.file_name)}

        report = schemas.ReconcileReport(
            orphaned_files=sorted(on_disk - recorded),
            orphaned_records=sorted(recorded - on_disk),
            partial_writes=self.storage.list_partials(),
        )
        for name in report.orphaned_files:
            logger.warning("orphaned file: %s has no uploads row", name)
        for name in report.orphaned_records:
            logger.warning("orphaned record: uploads row %s has no file", name)
        for name in report.partial_writes:
            logger.warning("partial write left in content directory: %s", name)
        return report
