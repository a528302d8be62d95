import re
import secrets

# 이란 휴대폰 번호: 09 + 9자리
_RE_IR_MOBILE = re.compile(r"09[0-9]{9}")


def validate_phone(phone) -> bool:
    if not isinstance(phone, str):
        return False
    return _RE_IR_MOBILE.fullmatch(phone) is not None


def format_phone(phone: str) -> str:
    """0912-345-6789 형태로 표시용 변환. 형식이 다르면 그대로 반환."""
    cleaned = re.sub(r"\D", "", phone)
    if len(cleaned) == 11 and cleaned.startswith("09"):
        return f"{cleaned[:4]}-{cleaned[4:7]}-{cleaned[7:]}"
    return phone


def generate_otp() -> str:
    # 100000 ~ 999999 균등 분포
    return str(100000 + secrets.randbelow(900000))
