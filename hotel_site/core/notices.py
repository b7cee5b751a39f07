from dataclasses import dataclass

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A transient message for the person editing (the toast on the admin screens)."""

    level: str
    title: str
    message: str = ""


def success(title: str, message: str = "") -> Notice:
    return Notice(SUCCESS, title, message)


def error(message: str, title: str = "Error") -> Notice:
    return Notice(ERROR, title, message)
