# amalgo/core/templating/helpers.py
"""
Custom Handlebars helper functions for amalgo templates.
"""
from typing import Any

from amalgo.util import get_language_hint

def lang_hint_helper(this: Any, extension: Any = None) -> str:
    """
    Pybars helper returning the code-fence language for a file extension.
    The first argument passed by pybars is the 'this' context, which we ignore.
    """
    return get_language_hint(extension if isinstance(extension, str) else "")

# Dictionary of helpers to be registered with TemplateRenderer
BUILTIN_HELPERS = {
    "get_lang_hint": lang_hint_helper,
}
