"""
Asset Pack Relocator.

Pre-build step that moves asset pack bundles and their pointer file between
the build tool's default output layout and the packaged (app bundle) layout.
"""

__version__ = "0.1.0"
