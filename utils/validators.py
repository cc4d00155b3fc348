import re

DAY_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid_task_title(title: str) -> bool:
    return 1 <= len(title.strip()) <= 200


def is_valid_date(date_str: str) -> bool:
    return bool(DAY_KEY_PATTERN.match(date_str))
