"""Software rendering into numpy frame buffers."""

from .renderer import FrameRenderer, Palette, render_frame

__all__ = ["FrameRenderer", "Palette", "render_frame"]
