from enum import Enum


class AppRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class ChangeEvent(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
