"""
Export and import of grocery lists and whole planner snapshots.
"""
import csv
import io
import json
import zipfile
from datetime import datetime
from typing import Iterable, List, Tuple
import logging

from mealboard.domain.Plan import PlanEntry
from mealboard.domain.Recipe import Recipe
from mealboard.domain.ShoppingList import AggregatedIngredient
from mealboard.utilities.constants import RECIPES_FILENAME, PLAN_FILENAME
from mealboard.utilities.exceptions import StorageError

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"


def _fmt_amount(amount) -> str:
    # display only; the list itself keeps full precision
    if isinstance(amount, float):
        return f"{amount:.2f}".rstrip("0").rstrip(".")
    return str(amount)


def export_grocery_csv(items: Iterable[AggregatedIngredient]) -> str:
    """Grocery list as CSV for spreadsheet apps."""
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=['name', 'amount', 'unit', 'recipes'])
    writer.writeheader()
    for item in items:
        writer.writerow({
            'name': item.name,
            'amount': _fmt_amount(item.amount),
            'unit': item.unit,
            'recipes': ', '.join(item.recipes),
        })
    return buf.getvalue()


def export_grocery_text(items: Iterable[AggregatedIngredient]) -> str:
    """Plain-text checklist used when sharing the list."""
    lines = ["Grocery List"]
    for item in items:
        lines.append(f"[ ] {item.name} - {_fmt_amount(item.amount)} {item.unit}".rstrip())
    return "\n".join(lines) + "\n"


def export_snapshot(recipes: Iterable[Recipe], entries: Iterable[PlanEntry]) -> bytes:
    """Recipes and plan as a ZIP archive with a metadata file."""
    recipes = list(recipes)
    entries = list(entries)
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, 'w', zipfile.ZIP_DEFLATED) as zipf:
        zipf.writestr(RECIPES_FILENAME, json.dumps([r.to_dict() for r in recipes], indent=2, ensure_ascii=False))
        zipf.writestr(PLAN_FILENAME, json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False))
        metadata = {
            'export_date': datetime.now().isoformat(),
            'version': EXPORT_VERSION,
            'files': [RECIPES_FILENAME, PLAN_FILENAME],
        }
        zipf.writestr('metadata.json', json.dumps(metadata, indent=2))
    logger.info("Exported %d recipes and %d plan entries", len(recipes), len(entries))
    return buf.getvalue()


def import_snapshot(data: bytes) -> Tuple[List[Recipe], List[PlanEntry]]:
    """Read an archive produced by export_snapshot."""
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zipf:
            recipes = _read_records(zipf, RECIPES_FILENAME)
            entries = _read_records(zipf, PLAN_FILENAME)
        return [Recipe.from_dict(r) for r in recipes], [PlanEntry.from_dict(e) for e in entries]
    except (zipfile.BadZipFile, KeyError, ValueError, TypeError) as e:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors too
        raise StorageError(f"Invalid planner archive: {e}", "import") from e


def _read_records(zipf: zipfile.ZipFile, member: str) -> list:
    records = json.loads(zipf.read(member))
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise ValueError(f"{member} must hold a list of objects")
    return records


__all__ = ['export_grocery_csv', 'export_grocery_text', 'export_snapshot', 'import_snapshot']
