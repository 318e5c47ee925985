"""Issued letter rendering — HTML documents carrying the verification URL."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, StrictUndefined

if TYPE_CHECKING:
    from letter_issuance.models.issuance import Issuance
    from letter_issuance.models.letter import Letter

LETTER_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"


def _format_date(value) -> str:
    return value.strftime("%B %d, %Y") if value else ""


class DocumentRenderer:
    """Render the printable document handed out at issuance.

    The verification URL is embedded as text and as a ``data-qr`` attribute;
    drawing the QR code itself is left to the print client.
    """

    def __init__(self, templates_dir: Path = LETTER_TEMPLATES) -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=True,
            undefined=StrictUndefined,
        )
        self._env.filters["date"] = _format_date

    def render_letter(
        self,
        letter: Letter,
        issuance: Issuance,
        *,
        department_name: str | None,
        verify_url: str,
    ) -> str:
        template = self._env.get_template("letter.html")
        return template.render(
            letter=letter,
            issuance=issuance,
            department_name=department_name or "",
            verify_url=verify_url,
            paragraphs=[p for p in letter.content.split("\n\n") if p.strip()],
        )
