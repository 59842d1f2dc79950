"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the application to the outside world (AI endpoints, the auth
provider, configuration files, the console) by implementing the interfaces
defined in the domain layer. Also hosts the cache and resilience services.
"""
