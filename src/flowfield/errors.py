class FlowFieldError(Exception):
    """Base class for renderer failures."""


class CompileError(FlowFieldError):
    """A shader failed to compile or link."""

    def __init__(self, diagnostic: str):
        super().__init__(f"Shader compilation failed:\n{diagnostic}")
        self.diagnostic = diagnostic


class DeviceError(FlowFieldError):
    """No usable window or GPU context could be acquired."""
