"""
Postboard backend
GraphQL API with user registration, login and posts
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
