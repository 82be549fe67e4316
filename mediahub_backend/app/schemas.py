from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


# =========================
# Media
# =========================
class FileInfo(BaseModel):
    name: str
    path: str
    url: str


class UploadResponse(BaseModel):
    message: str = "File uploaded successfully"
    file: FileInfo


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


# =========================
# Reconciliation
# =========================
class ReconcileReport(BaseModel):
    # on disk, no uploads row
    orphaned_files: List[str] = []
    # uploads row, file missing on disk
    orphaned_records: List[str] = []
    # leftover temp files from interrupted writes
    partial_writes: List[str] = []

    @property
    def consistent(self) -> bool:
        return not (self.orphaned_files or self.orphaned_records or self.partial_writes)
