from moovsafe_mobile.api import ApiConfigError, ApiError, MoovSafeClient
from moovsafe_mobile.stats import home_stats

__all__ = ["ApiConfigError", "ApiError", "MoovSafeClient", "home_stats"]
