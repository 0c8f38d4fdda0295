"""Fit engine, legacy adapter, standalone calculator and cockpit projector."""
