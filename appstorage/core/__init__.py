"""
Core primitives shared across appstorage.

This package hosts:
- configuration helpers (env vars, data root, folder names)
- the error taxonomy raised by stores and adapters
- the serializer port and its default JSON implementation
- logging setup for scripts

Stores and adapters depend on these modules rather than reading os.environ or
choosing an encoding themselves.
"""
