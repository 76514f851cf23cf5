from fitclub.client.api import FitClubClient, FitClubClientError, NotAuthenticatedError, ApiError

__all__ = ["FitClubClient", "FitClubClientError", "NotAuthenticatedError", "ApiError"]
