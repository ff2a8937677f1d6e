from .client import ThetaApiClient, get_client, reset_client  # noqa: F401
