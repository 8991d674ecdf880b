from social_api.models.user import User
from social_api.models.post import Post

__all__ = ["User", "Post"]
