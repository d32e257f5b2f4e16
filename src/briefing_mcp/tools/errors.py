class ToolError(RuntimeError):
    """A tool backend failed; the message is returned to the caller as the error field."""
