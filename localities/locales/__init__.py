"""Locale package for i18n JSON resources.

This package contains JSON translation files (en.json, ar.json)
that are accessed via importlib.resources. Keeping this as a real package
ensures the resources are discoverable both locally and when installed.
"""
