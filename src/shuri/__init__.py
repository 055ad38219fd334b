"""Vue component scaffolding with documentation registry integration."""

__version__ = "1.2.0"
