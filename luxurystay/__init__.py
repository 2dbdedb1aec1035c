"""LuxuryStay real-time notification core.

The package holds the connection directory, notification store, delivery
dispatcher, integration facade and websocket session handshake, exposed
through a FastAPI application.
"""
