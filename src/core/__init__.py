"""Core: configuration, domain models, contracts and the aggregation pass."""
