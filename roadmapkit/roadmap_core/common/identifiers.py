import string
import time
import uuid

_BASE36_DIGITS = string.digits + string.ascii_lowercase
TEMPLATE_ID_LENGTH = 9


def generate_template_id() -> str:
    """
    @returns 템플릿용 9자리 랜덤 base-36 ID (0-9, a-z).
    """
    value = uuid.uuid4().int
    digits = []
    for _ in range(TEMPLATE_ID_LENGTH):
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(digits)


def now_millis() -> int:
    """
    @returns 현재 시각 (epoch 밀리초).
    """
    return int(time.time() * 1000)
