"""Maiar: a plugin runtime for composing AI agent behaviour.

Plugins call into pluggable model capabilities through providers, and
conversational state is kept by the memory service.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
