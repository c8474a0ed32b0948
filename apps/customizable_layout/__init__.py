"""Persisted, user-customizable responsive dashboard layouts."""
