"""TinySpeck CLI — Typer-based command-line interface.

Provides the ``tinyspeck`` command with subcommands for serving webhooks,
calling Web API methods, inspecting payload routing and streaming
realtime events.

All output uses Rich for formatted terminal display.
"""
