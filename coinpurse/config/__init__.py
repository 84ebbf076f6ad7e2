"""
Pricing configuration module.

Typed defaults, YAML-backed per-shop overrides and validation.
"""
