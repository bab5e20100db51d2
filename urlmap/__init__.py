"""url-map: short-code allocation and visit accounting."""

from .shortcode import ShortCodeGenerator
from .service import MappingService

__version__ = "0.1.0"

__all__ = ["ShortCodeGenerator", "MappingService", "__version__"]
