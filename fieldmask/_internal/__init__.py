"""Internal modules for fieldmask.

WARNING: This package is not a stable API. Import from ``fieldmask`` instead.

Modules:
    masking - Cursor, recognizers and the field masker
    http - Masked request/response logging for httpx clients
"""
