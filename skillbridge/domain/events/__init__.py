"""Domain Event definitions.

Represents significant occurrences within the domain (API attempts, retries,
fallbacks) that other parts of the system might react to.
"""
