# reconcile_uploads.py
# one-off helper to compare the content directory with the uploads table.
# Read-only: prints what diverged, repairs nothing.

import sys

from mediahub_backend.app.core.config import settings
from mediahub_backend.app.database import Base, build_engine, build_session_factory
from mediahub_backend.app.logging_config import setup_logging
from mediahub_backend.app.media import MediaService
from mediahub_backend.app.storage import MediaStorage

setup_logging(settings.log_level)

engine = build_engine(settings)
Base.metadata.create_all(bind=engine)
db = build_session_factory(engine)()

try:
    report = MediaService(MediaStorage(settings.upload_dir)).reconcile(db)
    print(f"Content directory: {settings.upload_dir}")
    print(f"Orphaned files (no row):   {len(report.orphaned_files)}")
    for name in report.orphaned_files:
        print(f"  {name}")
    print(f"Orphaned records (no file): {len(report.orphaned_records)}")
    for name in report.orphaned_records:
        print(f"  {name}")
    print(f"Partial writes:            {len(report.partial_writes)}")
    for name in report.partial_writes:
        print(f"  {name}")
finally:
    db.close()
    engine.dispose()

sys.exit(0 if report.consistent else 1)
