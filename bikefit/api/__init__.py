"""HTTP API for the cockpit fit engine."""
