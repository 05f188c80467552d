"""Packaged catalog data, one subpackage per version."""
