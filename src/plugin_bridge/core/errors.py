"""Exceptions raised by Plugin Bridge."""


class PluginBridgeError(Exception):
    """Base class for all Plugin Bridge errors."""


class UnsafePathError(PluginBridgeError, ValueError):
    """An identifier destined for use as a path segment would escape its directory."""


class PluginLoadError(PluginBridgeError):
    """The plugin root could not be loaded at all."""
