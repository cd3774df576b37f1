"""Forum domain layer: value objects and aggregates."""
