"""Domain Layer: value objects, events, errors and the interfaces adapters implement."""
