"""Analysis engine: batched detection and score aggregation."""
