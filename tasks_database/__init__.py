from .db import Database, get_database_url
from .models import Base, Task, TaskStatus, User

__all__ = ["Base", "Database", "Task", "TaskStatus", "User", "get_database_url"]
