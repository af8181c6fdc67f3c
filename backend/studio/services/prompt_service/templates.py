"""Flower prompt templates: lookup and `{{variable}}` substitution."""

from typing import Dict, List, Optional

from studio.handlers.error_handler import InvalidRequestError
from studio.models.generate import FlowerTemplate
from studio.utility.utils import Helper
from studio.utility.logger import AppLogger

logger = AppLogger.get_logger(__name__)


class TemplateStore:
    """Holds the configured flower templates and renders prompts from them."""

    def __init__(self, templates: Optional[List[FlowerTemplate]] = None):
        """Load templates from YAML unless a list is injected."""
        if templates is None:
            raw = Helper().load_template(template="flower")
            templates = [FlowerTemplate.model_validate(entry) for entry in raw]
        self.templates: Dict[str, FlowerTemplate] = {t.id: t for t in templates}

    def list_templates(self) -> List[FlowerTemplate]:
        return list(self.templates.values())

    def get(self, template_id: str) -> FlowerTemplate:
        """Return the template or reject the request as a client error."""
        template = self.templates.get(template_id)
        if template is None:
            logger.warning(f"Unknown template requested: {template_id}")
            raise InvalidRequestError("Invalid template ID")
        return template

    @staticmethod
    def render(template: FlowerTemplate, variables: Dict[str, str]) -> str:
        """
        Substitute every declared variable; missing or empty values fall back
        to the variable's default. Undeclared variables are ignored.
        """
        prompt = template.prompt_template
        for variable in template.variables:
            value = variables.get(variable.name) or variable.default_value
            prompt = prompt.replace(f"{{{{{variable.name}}}}}", value)
        return prompt
