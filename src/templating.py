"""Jinja2 templates shared by the HTML pages."""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from src.services.markdown import render_markdown

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["markdown"] = render_markdown
