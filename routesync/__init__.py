"""routesync - mirror an in-process route tree into an API gateway.

Layers:
    core: configuration, constants, Result types, error codes, container
    domain: route tree variants, value objects, protocols, errors
    application: route-tree compiler and the sync orchestrator
    infrastructure: logging adapters, route tree providers, gateway client
"""

__version__ = "0.1.0"
