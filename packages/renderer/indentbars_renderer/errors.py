"""Error taxonomy shared by the renderer and layout packages."""

from __future__ import annotations


class IndentBarsError(ValueError):
    """Base class for rejected indentation-bar inputs."""


class ConfigurationError(IndentBarsError):
    """Malformed option values, raised while options are being built."""


class GeometryError(IndentBarsError):
    """Invalid cell geometry supplied by the host."""
