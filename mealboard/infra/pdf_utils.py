import io
from typing import Dict, Iterable, List

from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealboard.domain.ShoppingList import AggregatedIngredient
from mealboard.utilities.constants import MEAL_TYPES

_HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 12),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
]


def _build(title: str, data: List[list], pagesize, extra_style=()) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=pagesize,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )
    styles = getSampleStyleSheet()
    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle(_HEADER_STYLE + list(extra_style)))
    doc.build([Paragraph(title, styles["Title"]), Spacer(1, 16), table])
    return buf.getvalue()


def generate_pdf_for_week(grid: Dict[str, Dict[str, List[dict]]]) -> bytes:
    """Day / Breakfast / Lunch / Dinner table built from the calendar grid."""
    data = [["Day"] + [m.capitalize() for m in MEAL_TYPES]]
    for day, cells in grid.items():
        row = [day]
        for meal in MEAL_TYPES:
            names = [card["name"] for card in cells.get(meal, [])]
            row.append("\n".join(names) or "-")
        data.append(row)
    return _build("Meal Plan", data, landscape(A4), [("ALIGN", (0, 0), (-1, -1), "CENTER")])


def generate_pdf_for_grocery_list(items: Iterable[AggregatedIngredient]) -> bytes:
    """Printable grocery list with an empty tick column."""
    data = [["", "Item", "Amount", "For"]]
    for item in items:
        data.append(["[ ]", item.name, f"{item.amount:g} {item.unit}".strip(), ", ".join(item.recipes)])
    return _build("Grocery List", data, A4, [("ALIGN", (2, 1), (2, -1), "RIGHT")])
