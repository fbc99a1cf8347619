"""
Security test suite for the bookmark service.

This module contains security-focused tests that validate:
- Authorization (IDOR prevention) for bookmarks and tags
- Tag attachment limited to the caller's own tags

These tests should be run as part of CI/CD to prevent security regressions.
"""
