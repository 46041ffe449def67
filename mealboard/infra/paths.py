from pathlib import Path
from urllib.parse import quote

from mealboard.utilities.config import DATA_DIR
from mealboard.utilities.constants import RECIPES_FILENAME, PLAN_FILENAME

# Centralized paths for data files (single source of truth)


def user_dir(user_id: str, data_dir: Path = DATA_DIR) -> Path:
    # user ids come from request headers; percent-encode them into one path
    # segment so distinct ids never share a folder
    segment = quote(str(user_id), safe="")
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    return Path(data_dir) / (segment or "_anonymous")


def recipes_file(user_id: str, data_dir: Path = DATA_DIR) -> Path:
    return user_dir(user_id, data_dir) / RECIPES_FILENAME


def plan_file(user_id: str, data_dir: Path = DATA_DIR) -> Path:
    return user_dir(user_id, data_dir) / PLAN_FILENAME


__all__ = ['DATA_DIR', 'user_dir', 'recipes_file', 'plan_file']
