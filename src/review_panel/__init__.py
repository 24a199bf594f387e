__version__ = "0.1.0"

from .app.main import review, judges_catalog

__all__ = [
    "__version__",
    "review",
    "judges_catalog",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
