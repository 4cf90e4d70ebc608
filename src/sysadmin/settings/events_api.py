"""Events API connection settings.

The page and the grid endpoints share one base URL. ``BASE_URL`` is accepted
as a fallback name for deployments that still export it.
"""

from decouple import config

EVENTS_API_BASE_URL: str = config("EVENTS_API_BASE_URL", default=config("BASE_URL", default=""))
EVENTS_API_TIMEOUT: float = config("EVENTS_API_TIMEOUT", default=30.0, cast=float)
EVENTS_API_CONNECT_TIMEOUT: float = config("EVENTS_API_CONNECT_TIMEOUT", default=10.0, cast=float)
