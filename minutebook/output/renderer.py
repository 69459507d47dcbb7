"""Jinja2-based template renderer for meeting minutes."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from minutebook.config import settings
from minutebook.output.schemas import MinutesContext, RenderedMinutes

PACKAGED_TEMPLATES = Path(__file__).parent / "templates"


class MinutesRenderer:
    """Render minutes from Jinja2 templates.

    Supports both Markdown and HTML output formats. A custom template
    directory can be configured via ``settings.template_dir``.
    """

    def __init__(self, template_dir: str | Path | None = None):
        """Initialize renderer with template directory.

        Args:
            template_dir: Path to directory containing .j2 templates.
                          Defaults to settings.template_dir, then the
                          packaged templates.
        """
        self.template_dir = Path(template_dir or settings.template_dir or PACKAGED_TEMPLATES)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "htm", "html.j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, context: MinutesContext, template_name: str = "minutes") -> RenderedMinutes:
        """Render minutes in both Markdown and HTML formats.

        Args:
            context: MinutesContext with all minutes data
            template_name: Base name of template (without .md.j2/.html.j2)

        Returns:
            RenderedMinutes with both formats

        Raises:
            TemplateNotFound: If template files don't exist
        """
        return RenderedMinutes(
            minutes_id=context.minutes_id,
            markdown=self.render_markdown(context, template_name),
            html=self.render_html(context, template_name),
            template_used=template_name,
        )

    def render_markdown(self, context: MinutesContext, template_name: str = "minutes") -> str:
        """Render minutes as Markdown."""
        template = self.env.get_template(f"{template_name}.md.j2")
        return template.render(context.model_dump())

    def render_html(self, context: MinutesContext, template_name: str = "minutes") -> str:
        """Render minutes as HTML."""
        template = self.env.get_template(f"{template_name}.html.j2")
        return template.render(context.model_dump())


__all__ = ["MinutesRenderer", "TemplateNotFound"]
