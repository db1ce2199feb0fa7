from datetime import datetime
from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def format_date(value: str) -> str:
    """Render an ISO ``YYYY-MM-DD`` date for people; anything else is shown as-is."""
    try:
        d = datetime.strptime(value, "%Y-%m-%d")
    except (TypeError, ValueError):
        return str(value)
    return f"{d.month}/{d.day}/{d.year}"


def format_timestamp(value: datetime) -> str:
    return f"{value.month}/{value.day}/{value.year}, {value:%H:%M:%S}"


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["pretty_date"] = format_date
templates.env.filters["pretty_timestamp"] = format_timestamp


def render(name: str, **context) -> str:
    return templates.env.get_template(name).render(**context)
