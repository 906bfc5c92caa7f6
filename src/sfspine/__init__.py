"""
sforce-spine - input and response normalization for the record service APIs.

    from sfspine import coerce, resolve, headers, repair
"""

__version__ = "0.1.0"

from sfspine.core import *  # noqa: F401,F403
from sfspine.core import __all__ as _core_all
from sfspine.pipeline import PreparedRequest, finalize_response, prepare_request

__all__ = [*_core_all, "PreparedRequest", "prepare_request", "finalize_response", "__version__"]
