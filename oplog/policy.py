from enum import Enum


class ErrorPolicy(str, Enum):
    RAISE = "raise"
    SKIP = "skip"
