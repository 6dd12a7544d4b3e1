"""Configuration module for the drama client.

ClientConfig lives in ``drama_client.config.settings``; it is not imported
here so that low-level modules can read the constants without pulling in the
retry policy.
"""

# Import all constants
from .constants import *
