"""Pydantic models for rider, frame, setup and cockpit shapes."""
