"""Transports around the routing core.

``web_api`` posts to remote methods over HTTP, ``rtm`` keeps a realtime
socket open and feeds its frames to the dispatcher, and ``listener`` accepts
webhook requests and does the same for request bodies.
"""
