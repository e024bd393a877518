"""Per-session state and upstream dispatchers.

Import from the submodules directly; the WebSocket writer depends on
``done`` while the dispatchers depend on the writer.
"""
