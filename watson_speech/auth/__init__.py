"""
Authentication module for watson-speech.

Provides the IAM authenticator that turns an API key into a cached
bearer token.
"""

from watson_speech.auth.iam_authenticator import (
    IAM_URL,
    AccessToken,
    IamAuthenticator,
)

__all__ = [
    "IAM_URL",
    "AccessToken",
    "IamAuthenticator",
]
