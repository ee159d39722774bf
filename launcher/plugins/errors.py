"""Plugin system exceptions."""


class PluginValidationError(ValueError):
    """Raised when a plugin handed to the registry is structurally invalid.

    Registration does not occur; the error is propagated to the caller.
    """

    def __init__(self, message: str, plugin_id: str = ""):
        super().__init__(message)
        self.plugin_id = plugin_id
