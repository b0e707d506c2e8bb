"""Good/bad variant propagation for result-like values and custom enums."""

__version__ = "0.1.0"
__all__ = ["bits", "core", "derive", "flow"]