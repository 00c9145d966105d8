"""
Cross-cutting helpers: patient locking, request middleware, time handling.
"""
