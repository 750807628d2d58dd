"""Adapters implementing the resource store port."""
