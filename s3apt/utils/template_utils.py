"""Template processing utilities"""

import string
from typing import Any, Dict

from ..templates import load_template


def render_template(template: str, variables: Dict[str, Any]) -> str:
    """
    Render template with variables

    Args:
        template: Template string
        variables: Variables to substitute

    Returns:
        Rendered string

    Raises:
        KeyError: If a placeholder has no value
    """
    return string.Template(template).substitute(variables)


def render_builtin_template(category: str, name: str, variables: Dict[str, Any]) -> str:
    """
    Render a template shipped inside the package

    Args:
        category: Template category
        name: Template name
        variables: Variables to substitute

    Returns:
        Rendered string

    Raises:
        FileNotFoundError: If template not found
    """
    template = load_template(category, name)
    if template is None:
        raise FileNotFoundError(f"Template not found: {category}/{name}")

    return render_template(template, variables)
