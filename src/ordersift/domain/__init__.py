"""Order resolution domain: normalization, batching, scheduling and reconciliation."""
