"""Render the HTML partials used by glossary annotations."""

from __future__ import annotations

from pathlib import Path
import secrets

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape
from markupsafe import Markup
from slugify import slugify


TEMPLATE_DIR = Path(__file__).resolve().parent / "partials"


class HtmlFormatter:
    """Render HTML partials using Jinja2."""

    def __init__(self, template_dir: Path = TEMPLATE_DIR) -> None:
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=False,
        )
        self.templates: dict[str, Template] = {}

    def _template(self, name: str) -> Template:
        template = self.templates.get(name)
        if template is None:
            template = self.env.get_template(name)
            self.templates[name] = template
        return template

    def render(self, name: str, **context: object) -> str:
        return self._template(name).render(**context).strip()

    @staticmethod
    def unique_id(link: str) -> str:
        """Return a fresh element identifier for one rendering of ``link``."""
        token = secrets.token_hex(4)
        return f"def{token}-{slugify(link) or 'term'}"

    def define_label(self, link: str, target_id: str) -> str:
        """Clickable label toggling the element identified by ``target_id``."""
        return self.render("define_label.html", link=link, target_id=target_id)

    def define_block(self, text: str, target_id: str) -> str:
        """Hidden overlay carrying the definition text."""
        # Definition text is markup source and is emitted verbatim.
        return self.render("define_block.html", text=Markup(text), target_id=target_id)

    def define(self, link: str, text: str) -> str:
        """Render the label and the hidden block for one ``<define>`` occurrence."""
        target_id = self.unique_id(link)
        return self.define_label(link, target_id) + self.define_block(text, target_id)

    def page(self, body: str, *, title: str | None = None) -> str:
        """Wrap a rendered body into a standalone page with the toggle script."""
        return self._template("page.html").render(body=Markup(body), title=title or "")


__all__ = ["TEMPLATE_DIR", "HtmlFormatter"]
