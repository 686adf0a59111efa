# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ErrorKind(str, Enum):
    INVALID_FORMAT = "invalid_format"
    ALREADY_SET = "already_set"
    LOCK_CONTENTION = "lock_contention"
    ALREADY_TAKEN = "already_taken"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    INVALID_FORMAT = ErrorInfo("Invalid username format", status.HTTP_400_BAD_REQUEST)
    ALREADY_SET = ErrorInfo("Username already set", status.HTTP_409_CONFLICT)
    LOCK_CONTENTION = ErrorInfo(
        "This username is being claimed by another user. Please try again.",
        status.HTTP_409_CONFLICT,
    )
    ALREADY_TAKEN = ErrorInfo(
        "This username is already taken. Please try another.",
        status.HTTP_409_CONFLICT,
    )
    ACCOUNT_NOT_FOUND = ErrorInfo("Account not found", status.HTTP_404_NOT_FOUND)
    UNAUTHORIZED = ErrorInfo("Unauthorized", status.HTTP_401_UNAUTHORIZED)
    TIMEOUT = ErrorInfo("Request timed out", status.HTTP_504_GATEWAY_TIMEOUT)
    INTERNAL_ERROR = ErrorInfo("Internal Error", status.HTTP_502_BAD_GATEWAY)
