# Import all targets to trigger registration with the registry.
from concertinfo.targets import lastfm  # noqa: F401
