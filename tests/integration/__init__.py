"""
embedded-mongo Integration Tests

These tests start real MongoDB containers and need a reachable Docker daemon;
they are skipped otherwise. Containers are named with the
``embedded-mongo-it`` prefix and removed before and after the session.
"""
