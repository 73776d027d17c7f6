"""
Transport module for watson-speech.

Provides the aiohttp-backed request executor shared by the IAM
authenticator and the service clients.
"""

from watson_speech.transport.http import HttpResponse, HttpTransport

__all__ = [
    "HttpResponse",
    "HttpTransport",
]
