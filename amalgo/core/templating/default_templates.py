# amalgo/core/templating/default_templates.py
"""
Handlebars sources for the built-in renderers.

Newlines are written explicitly so block tags never depend on the
template engine's standalone-line whitespace handling.
"""

MARKDOWN_TEMPLATE = (
    "{{#if files}}"
    "{{#each files}}"
    "{{{this.heading}}} {{{this.rel_path}}}\n"
    "```{{get_lang_hint this.extension}}\n"
    "{{{this.body}}}"
    "```\n"
    "\n"
    "{{/each}}"
    "{{else}}"
    "_No files found._\n"
    "{{/if}}"
)

XML_TEMPLATE = (
    "<files>\n"
    "{{#each files}}"
    "<file path=\"{{this.rel_path}}\" language=\"{{get_lang_hint this.extension}}\">\n"
    "{{this.body}}"
    "</file>\n"
    "{{/each}}"
    "</files>\n"
)
