# huno 전역 예외 정의
# main.py 의 exception handler 가 status_code / message 로 {"error": ...} 응답을 만든다.


class HunoError(Exception):
    status_code = 500
    message = "خطا در پردازش درخواست"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# ---------- 400: 입력 검증 ----------
class ValidationError(HunoError):
    status_code = 400
    message = "اطلاعات نامعتبر است"


class InvalidPhone(ValidationError):
    message = "شماره موبایل نامعتبر است"


class InvalidCode(ValidationError):
    message = "کد تایید نامعتبر است"


class EmptyMessage(ValidationError):
    message = "پیام نامعتبر است"


class InsufficientTargets(ValidationError):
    message = "حداقل ۲ شخصیت انتخاب کنید"


class InvalidPurchase(ValidationError):
    message = "اطلاعات نامعتبر است"


class UnknownPackage(ValidationError):
    message = "بسته انتخاب شده نامعتبر است"


class InvalidAmount(ValidationError):
    message = "مقدار اعتبار نامعتبر است"


# ---------- 400: OTP 인증 ----------
class AuthChallengeError(HunoError):
    status_code = 400
    message = "خطا در تایید کد"


class NoPendingChallenge(AuthChallengeError):
    message = "کد تایید یافت نشد. لطفاً دوباره درخواست کنید."


class Expired(AuthChallengeError):
    message = "کد تایید منقضی شده است"


class CodeMismatch(AuthChallengeError):
    message = "کد تایید اشتباه است"


# ---------- 404 ----------
class NotFoundError(HunoError):
    status_code = 404
    message = "یافت نشد"


class UserNotFound(NotFoundError):
    message = "کاربر یافت نشد"
