"""Bundled default dataset (algeria-cities.xml).

Kept as a real package so the XML is discoverable through
importlib.resources both locally and when installed.
"""
