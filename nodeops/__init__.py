"""Building blocks for operating blockchain full nodes on Kubernetes."""

__version__ = "0.1.0"