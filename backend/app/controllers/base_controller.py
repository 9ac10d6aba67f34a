"""
Base controller class.
Controllers wrap one service per resource and shape its results into
the API's response schemas.
"""

from abc import ABC


class BaseController(ABC):
    """Base controller class for all controllers."""
    pass
