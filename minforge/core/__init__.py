"""Core batch engine: resolution, staleness, aggregation, diagnostics, runner."""
