"""Test suite for the rendezvous signaling relay.

Unit tests live under unit/ grouped by area (limits, session, messages,
websocket, server, config) and run against in-memory fake websockets from
helpers/. signal_probe.py is a standalone client for a running relay.
"""
