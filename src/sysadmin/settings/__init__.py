"""Settings for the System Admin console.

Split by concern; every module reads its values through python-decouple.
"""

from .base import *  # noqa: F401,F403
from .events_api import *  # noqa: F401,F403
from .observability import *  # noqa: F401,F403
