"""Snapshot writer."""

import json
import os
import tempfile
from pathlib import Path

from ..models import Snapshot


def write_snapshot(snapshot: Snapshot, path: Path) -> Path:
    """Write the snapshot as JSON, replacing any previous one atomically."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(snapshot.to_document(), f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    return path
