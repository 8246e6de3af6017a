from upca_renderer.model.enums import BarStyle, ChecksumPolicy, TextAnchor

__all__ = ["BarStyle", "ChecksumPolicy", "TextAnchor"]
