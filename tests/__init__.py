"""Test suite for the precompiled-plugins package.

This package contains unit and integration tests validating script
scanning, plugin naming, wrapper generation, descriptor publishing
and task wiring of precompiled script plugins.
"""
