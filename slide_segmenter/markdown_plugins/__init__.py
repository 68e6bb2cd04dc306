"""markdown-it-py plugins used by the slide preview."""
from .element_attrs import element_attrs_plugin

__all__ = ["element_attrs_plugin"]
