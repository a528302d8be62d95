# huno/services/fallback.py
# API 키가 없거나 백엔드 호출이 실패했을 때 쓰는 데모 응답 템플릿
from __future__ import annotations

from typing import Optional

from huno.models.registry import AIModel, Persona, get_mode


def model_fallback(model: Optional[AIModel], message: str, mode_id: Optional[str] = None) -> str:
    model_name = model.name if model else "AI"
    text = (
        f"سلام! من {model_name} هستم. پیام شما را دریافت کردم: \"{message}\"\n\n"
        "این یک پاسخ نمونه است. برای استفاده از API واقعی، لطفاً کلید OPENROUTER_API_KEY را در فایل .env تنظیم کنید."
    )

    # 멀티에이전트 모드면 어떤 모드로 받은 요청인지 한 줄 덧붙임
    mode = get_mode(mode_id)
    if mode and mode.multi_agent:
        text += f"\n\nحالت: {mode.name_fa}"
    return text


def persona_fallback(persona: Persona, message: str) -> str:
    if persona.fallback_template:
        return persona.fallback_template.format(message=message)
    return (
        f"به عنوان {persona.name_fa}، در مورد \"{message}\" باید بگویم که این موضوع نیاز به تفکر عمیق‌تر دارد. "
        "هر تصمیمی باید با دقت و از زوایای مختلف بررسی شود."
    )
