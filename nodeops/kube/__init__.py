"""Utility types and functions for managing Kubernetes resources."""