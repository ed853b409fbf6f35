"""LRE Tools — liquid rocket engine throttle and regenerative cooling analysis."""

__app_name__ = "lre-tools"
__version__ = "0.1.0"
