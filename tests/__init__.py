"""Test suite for avatar-relay.

Unit tests live under unit/, organized by area (auth, limits, upstream,
websocket, server, ...). Shared fakes for the browser socket and the
upstream backends are in the helpers/ subpackage. live.py is an
interactive client for a running relay and is not collected by pytest.
"""
