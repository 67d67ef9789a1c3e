"""API Documentation Builder.

Extracts class, config, property, method and event documentation from
``/** ... */`` source comments, resolves the class hierarchy and renders
a reference site through Jinja2 templates.
"""

__version__ = "0.1.0"
