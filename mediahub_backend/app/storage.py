"""File storage utilities.

``MediaStorage`` wraps the content directory: every stored file lives directly
inside it under its generated name. Writes go to a temp file in the same
directory and are moved into place with ``os.replace`` so a reader never sees
a truncated file.
"""
import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, List

from .errors import InvalidName

logger = logging.getLogger("mediahub.storage")

TMP_PREFIX = ".tmp-"
CHUNK_SIZE = 1024 * 1024


class MediaStorage:
    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def ensure_dir(self) -> None:
        """Ensure that the content directory exists."""
        self.root.mkdir(parents=True, exist_ok=True)

    def resolve(self, name: str) -> Path:
        """Map a storage name to its path, rejecting anything that is not a
        plain file name directly inside the content directory."""
        if (
            not name
            or name in (".", "..")
            or "/" in name
            or "\\" in name
            or "\x00" in name
            or name.startswith(TMP_PREFIX)
        ):
            raise InvalidName(f"Rejected storage name: {name!r}")
        path = self.root / name
        # containment is checked on the target, but the named entry is what
        # callers write to and unlink
        if path.resolve().parent != self.root:
            raise InvalidName(f"Rejected storage name: {name!r}")
        return path

    def save(self, stream: BinaryIO, name: str) -> Path:
        """Copy ``stream`` in full to ``name`` and return the final path.

        Nothing is left behind if the copy fails part way, including when the
        source stream raises (client went away).
        """
        dest = self.resolve(name)
        self.ensure_dir()
        tmp_path = self.root / f"{TMP_PREFIX}{uuid.uuid4().hex}"
        try:
            with open(tmp_path, "wb") as out_f:
                shutil.copyfileobj(stream, out_f, CHUNK_SIZE)
            os.replace(tmp_path, dest)
        except BaseException:
            _safe_unlink(tmp_path)
            raise
        return dest

    def remove(self, name: str) -> None:
        """Delete a stored file. Raises ``FileNotFoundError`` if it is absent."""
        os.remove(self.resolve(name))

    def list_names(self) -> List[str]:
        return sorted(
            p.name for p in self.root.iterdir()
            if p.is_file() and not p.name.startswith(TMP_PREFIX)
        )

    def list_partials(self) -> List[str]:
        return sorted(
            p.name for p in self.root.iterdir()
            if p.is_file() and p.name.startswith(TMP_PREFIX)
        )


def _safe_unlink(path: Path) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.warning("Could not remove partial write %s: %s", path, e)
