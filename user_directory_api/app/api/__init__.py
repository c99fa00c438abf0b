"""
API package containing versioned routes.

Each version subpackage (``v1``) exposes a ``router`` that the
application includes.
"""
