"""Unit conversion and safe type coercion helpers."""
