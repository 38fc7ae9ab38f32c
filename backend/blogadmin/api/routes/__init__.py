# API routes
from blogadmin.api.routes import articles
from blogadmin.api.routes import comments
from blogadmin.api.routes import tags
from blogadmin.api.routes import categories
from blogadmin.api.routes import users

__all__ = ["articles", "comments", "tags", "categories", "users"]
