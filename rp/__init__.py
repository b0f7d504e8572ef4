"""Rocket Pool smartnode release and validator tooling."""

__version__ = "0.1.0"
