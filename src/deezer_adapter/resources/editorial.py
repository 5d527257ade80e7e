"""
Editorial resource
"""

from .base import Resource
from .registry import register_resource


@register_resource("editorial")
class Editorial(Resource):
    """To work with Deezer editorial objects (name and picture fields)"""
