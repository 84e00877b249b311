# backend/app/services/template_service.py
"""
Template rendering service for the Enescena platform.

Provides centralized template rendering using Jinja2 for e-mail bodies,
with common context variables and display filters.
"""

from datetime import datetime
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from ..core.config import settings
from ..core.constants import BRAND_NAME

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


class TemplateService:
    """
    Centralized template rendering service using Jinja2.

    Handles all template rendering for the platform, providing a consistent
    interface and common context variables.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir or TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=True,  # Enable autoescaping for security
            trim_blocks=True,  # Remove trailing newlines from blocks
            lstrip_blocks=True,  # Remove leading whitespace from blocks
        )
        self._register_custom_filters()
        self.logger = logging.getLogger(self.__class__.__name__)

    def _register_custom_filters(self) -> None:
        """Register custom Jinja2 filters."""

        def currency(value: float) -> str:
            """Format a number as currency."""
            return f"${float(value):,.2f}"

        self.env.filters["currency"] = currency
        self.env.filters["local_datetime"] = format_local_datetime

    def get_common_context(self) -> Dict[str, Any]:
        """Common context variables used across all templates."""
        return {
            "brand_name": BRAND_NAME,
            "current_year": datetime.now().year,
            "frontend_url": settings.frontend_url.rstrip("/"),
            "support_email": settings.from_email,
        }

    def render_template(
        self, template_name: str, context: Optional[Dict[str, Any]] = None, **kwargs: Any
    ) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Path to template relative to templates directory
            context: Dictionary of template variables
            **kwargs: Additional template variables

        Raises:
            TemplateNotFound: If template doesn't exist
        """
        try:
            template = self.env.get_template(template_name)

            full_context = self.get_common_context()
            if context:
                full_context.update(context)
            full_context.update(kwargs)

            rendered = template.render(full_context)
            self.logger.debug(f"Successfully rendered template: {template_name}")
            return rendered

        except TemplateNotFound:
            self.logger.error(f"Template not found: {template_name}")
            raise

    def template_exists(self, template_name: str) -> bool:
        try:
            self.env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False


def format_local_datetime(value: datetime, tz_name: Optional[str] = None) -> str:
    """Render an aware datetime in the display timezone, e.g. 'Sep 12, 2025, 2:00 PM'."""
    local = value.astimezone(ZoneInfo(tz_name or settings.email_timezone))
    hour = local.strftime("%I").lstrip("0") or "12"
    return f"{local.strftime('%b')} {local.day}, {local.year}, {hour}:{local.strftime('%M %p')}"
