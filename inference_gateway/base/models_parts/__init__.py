"""Domain dataclasses for decoded streams (one class per module)."""
