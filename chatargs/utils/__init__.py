"""Utility helpers shared across chatargs."""
