from sample_types.common import ApiResponse
from sample_types.errors import AppError, ConfigError, UpstreamError
from sample_types.users import Role, User

__all__ = [
    "ApiResponse",
    "AppError",
    "ConfigError",
    "Role",
    "UpstreamError",
    "User",
]
