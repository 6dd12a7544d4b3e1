"""Client façade and endpoint resources."""

from .client import DramaAPIClient
from .resources import AIConfigAPI, PropAPI

__all__ = ["DramaAPIClient", "AIConfigAPI", "PropAPI"]
