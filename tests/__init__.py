# SHACAL Vault Test Suite
"""
Test suite including:
- Unit tests
- Integration tests (command line)
- Security tests (wrong passwords, malformed and tampered files)

Run with: pytest
"""
