"""
Address book core REST API package

Use ``create_app`` to build a new application or the global
wrapper ``api`` to lazily access a default application instance.
"""

from .api import api, create_app
