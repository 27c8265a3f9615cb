"""Domain layer: model, ports, errors and the reconciliation engine."""
