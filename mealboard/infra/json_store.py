"""JSON file helpers shared by the repositories."""
import json
import os
import shutil
import tempfile
import logging
from pathlib import Path
from typing import Any

from mealboard.utilities.exceptions import StorageError

logger = logging.getLogger(__name__)


def read_json(path: Path, default: Any, operation: str = "load") -> Any:
    """Read a JSON document; a missing file yields ``default``, anything unreadable raises StorageError."""
    path = Path(path)
    if not path.exists():
        logger.info("Data file not found: %s. Starting empty.", path)
        return default
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise StorageError(f"Invalid JSON in {path.name}: {e}", operation, {"path": str(path)}) from e
    except OSError as e:
        raise StorageError(f"Cannot read {path.name}: {e}", operation, {"path": str(path)}) from e


def atomic_write(path: Path, data: Any, operation: str = "save") -> None:
    """Write JSON next to the target and move it into place so readers never see half a file."""
    path = Path(path)
    tmp_path = None
    try:
        os.makedirs(path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, path)
    except (OSError, TypeError, ValueError) as e:
        raise StorageError(f"Cannot write {path.name}: {e}", operation, {"path": str(path)}) from e
    finally:
        if tmp_path and os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError:
                logger.warning("Could not remove temp file %s", tmp_path)
