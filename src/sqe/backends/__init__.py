"""Backends for SQE output generation (HTML page + runtime)."""

from .html_generator import GeneratorOptions, generate_html, save_html

__all__ = ["GeneratorOptions", "generate_html", "save_html"]
