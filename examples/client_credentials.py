"""
oauth-http Client Credentials Example
"""

import json
import logging
import os

from oauth_http import ClientConfig, HttpRequestExecutor, TokenResponseError
from oauth_http.logging_setup import setup_structured_logger


def main():
    setup_structured_logger(logging.DEBUG)

    config = ClientConfig.from_env(user_agent="client-credentials-example/1.0")
    executor = HttpRequestExecutor(config)

    token_url = os.getenv("OAUTH_TOKEN_URL", "https://auth.example.com/oauth/token")

    print("Requesting access token...")
    try:
        body = executor.retrieve_response(
            token_url,
            {
                "grant_type": "client_credentials",
                "client_id": os.getenv("OAUTH_CLIENT_ID", "client"),
                "client_secret": os.getenv("OAUTH_CLIENT_SECRET", "secret"),
            },
            {"Accept": "application/json"},
            "POST",
        )
    except TokenResponseError as e:
        print(f"✗ Request failed: {e}")
        return

    # Error statuses come back as bodies too
    token = json.loads(body)
    if "error" in token:
        print(f"✗ Token endpoint rejected the request: {token['error']}")
        return

    print(f"✓ Access token received, expires in {token.get('expires_in', '?')}s")


if __name__ == "__main__":
    main()
