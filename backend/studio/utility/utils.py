"""Shared helper utilities for YAML-backed prompt configuration."""

import os
import yaml
from typing import Any
from studio.utility.path_finder import Finder


class Helper:
    """Provide reusable utilities for loading prompt configuration.

    Template content lives in `config/templates.yml` so wording changes do
    not require code changes.
    """

    def __init__(
        self,
    ):
        """Initialize the helper with access to configured paths."""
        self.path = Finder()

    def load_template(self, filename: str = "templates.yml", template: str = "flower") -> Any:
        """Load a template section from disk based on the requested type."""
        config_dir = self.path.get_directory("config")
        full_path = os.path.join(config_dir, filename)
        with open(full_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        template_map = {
            "flower": "FLOWER_TEMPLATES",
            "rewrite": "GEMINI_REWRITE_TEMPLATE",
            "reference_note": "GEMINI_REFERENCE_NOTE",
        }

        template_key = template_map.get(template)

        if not template_key:
            raise ValueError(f"Unknown template type: {template}")

        if not data or template_key not in data:
            raise KeyError(f"Template '{template_key}' missing in {filename}")

        return data[template_key]
