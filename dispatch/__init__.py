"""Delivery dispatch: order lifecycle engine for sellers, drivers and admins."""

__version__ = "0.1.0"
