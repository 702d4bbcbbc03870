"""
Dockwatch - container inventory polling agent.

Periodically snapshots the local Docker engine (containers, images, networks)
and reports it to a remote status endpoint.
"""

__version__ = "0.1.0"
__author__ = "Dockwatch"

__all__ = ["__version__"]
