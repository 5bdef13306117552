"""kubedemo - declare a Deployment and NodePort Service, watch, then clean up."""

__version__ = "0.1.0"
