# huno/models/registry.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class AIModel:
    id: str
    name: str
    provider: str
    description: str
    credit_cost: int
    avatar: str
    color: str
    openrouter_id: str

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "provider": self.provider,
            "description": self.description,
            "creditCost": self.credit_cost,
            "avatar": self.avatar,
            "color": self.color,
            "openRouterId": self.openrouter_id,
        }


@dataclass(frozen=True)
class ChatMode:
    id: str
    name: str
    name_fa: str
    description: str
    icon: str
    multi_agent: bool
    color: str
    system_prompt: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "nameFa": self.name_fa,
            "description": self.description,
            "icon": self.icon,
            "multiAgent": self.multi_agent,
            "color": self.color,
        }


@dataclass(frozen=True)
class Persona:
    id: str
    name: str
    name_fa: str
    avatar: str
    category: str
    description: str
    thinking_style: str
    system_prompt: str
    # "{message}" 자리에 사용자 메시지가 들어감
    fallback_template: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "nameFa": self.name_fa,
            "avatar": self.avatar,
            "category": self.category,
            "description": self.description,
            "thinkingStyle": self.thinking_style,
        }


@dataclass(frozen=True)
class CreditPackage:
    id: str
    name: str
    credits: int
    price: int  # 토만
    popular: bool = False

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "credits": self.credits,
            "price": self.price,
            "popular": self.popular,
        }


DEFAULT_MODEL_ID = "gpt-4.1"
DEFAULT_MODE_ID = "chat"


AI_MODELS: Tuple[AIModel, ...] = (
    AIModel("gpt-4.1", "GPT-4.1", "openai", "OpenAI's latest model with advanced reasoning", 5, "🟢", "#10a37f", "openai/gpt-4.1"),
    AIModel("o3", "OpenAI O3", "openai", "OpenAI's reasoning-optimized model", 8, "⚡", "#ff6b35", "openai/o3"),
    AIModel("claude-sonnet-4", "Claude Sonnet 4", "anthropic", "Anthropic's balanced and capable model", 4, "🟠", "#d4a373", "anthropic/claude-sonnet-4"),
    AIModel("claude-opus-4", "Claude Opus 4", "anthropic", "Anthropic's most powerful model", 10, "🟣", "#7c3aed", "anthropic/claude-opus-4"),
    AIModel("gemini-2.5-pro", "Gemini 2.5 Pro", "google", "Google's advanced multimodal AI", 5, "💎", "#4285f4", "google/gemini-2.5-pro-preview"),
    AIModel("deepseek-r1", "DeepSeek R1", "deepseek", "DeepSeek's reasoning model", 3, "🔍", "#00bcd4", "deepseek/deepseek-r1"),
    AIModel("grok-3", "Grok 3", "xai", "xAI's witty and knowledgeable model", 5, "🦊", "#f97316", "x-ai/grok-3"),
    AIModel("llama-4-maverick", "Llama 4 Maverick", "meta", "Meta's open-source powerhouse", 2, "🦙", "#0668e1", "meta-llama/llama-4-maverick"),
)


CHAT_MODES: Tuple[ChatMode, ...] = (
    ChatMode("chat", "Chat", "گفتگو", "Standard conversation", "💬", False, "#6b7280"),
    ChatMode(
        "analyze", "Analyze", "تحلیل", "Deep analysis with multiple perspectives", "🔬", True, "#3b82f6",
        "You are an expert analyst. Provide deep, structured analysis with multiple perspectives. "
        "Format your response with clear sections.",
    ),
    ChatMode(
        "brainstorm", "Brainstorm", "ایده‌پردازی", "Creative ideation with AI collaboration", "💡", True, "#f59e0b",
        "You are a creative ideation expert. Generate diverse, innovative ideas and possibilities. "
        "Be imaginative and think outside the box.",
    ),
    ChatMode(
        "debate", "Debate", "مناظره", "AI models debate different viewpoints", "⚔️", True, "#ef4444",
        "You are participating in a debate. Present your arguments clearly and consider counterarguments. "
        "Be persuasive but fair.",
    ),
    ChatMode(
        "solve", "Solve", "حل مسئله", "Collaborative problem solving", "🧩", True, "#10b981",
        "You are a problem-solving expert. Break down problems systematically and provide actionable "
        "solutions step by step.",
    ),
)


PERSONAS: Tuple[Persona, ...] = (
    Persona(
        id="steve-jobs",
        name="Steve Jobs",
        name_fa="استیو جابز",
        avatar="🍎",
        category="tech",
        description="Visionary co-founder of Apple",
        thinking_style="Design-focused, perfectionist, reality distortion field",
        system_prompt=(
            "You are simulating Steve Jobs' thinking style. Focus on design excellence, simplicity, user "
            "experience, and the intersection of technology and liberal arts. Be passionate, direct, and "
            "occasionally confrontational. Push for perfection and question everything that isn't magical."
        ),
        fallback_template=(
            'من همیشه به سادگی ایمان داشتم. در مورد "{message}"، باید بپرسیم: آیا این واقعاً جادویی است؟ '
            "آیا تجربه کاربر را متحول می‌کند؟ اگر نه، باید از نو شروع کنیم. نوآوری به معنای گفتن \"نه\" "
            'به هزار چیز است تا بتوانیم به یک چیز "بله" بگوییم.'
        ),
    ),
    Persona(
        id="elon-musk",
        name="Elon Musk",
        name_fa="ایلان ماسک",
        avatar="🚀",
        category="tech",
        description="CEO of Tesla and SpaceX",
        thinking_style="First principles thinking, ambitious, unconventional",
        system_prompt=(
            "You are simulating Elon Musk's thinking style. Apply first principles thinking, question "
            "conventional wisdom, and think at massive scale. Be ambitious about the future of humanity, "
            "space, and sustainable energy. Don't accept \"it can't be done\" as an answer."
        ),
        fallback_template=(
            'بیایید از اصول اولیه شروع کنیم. در مورد "{message}"، سوال اصلی این است: آیا از نظر فیزیکی '
            "ممکن است؟ اگر ممکن است، پس فقط مسئله مهندسی است. ما باید فکر کنیم که اگر می‌خواستیم این را "
            "از صفر بسازیم، چه می‌کردیم؟"
        ),
    ),
    Persona(
        id="naval-ravikant",
        name="Naval Ravikant",
        name_fa="نوال راویکانت",
        avatar="🧘",
        category="philosophy",
        description="Philosopher-entrepreneur",
        thinking_style="Clear thinking, wealth creation, happiness optimization",
        system_prompt=(
            "You are simulating Naval Ravikant's thinking style. Focus on clear, first-principles thinking "
            "about wealth, happiness, and meaning. Share timeless wisdom, question assumptions, and emphasize "
            "the importance of leverage, judgment, and specific knowledge."
        ),
        fallback_template=(
            '"{message}" - این موضوع جالبی است. به نظر من، باید بپرسیم: آیا این به ما آزادی بیشتری '
            'می‌دهد؟ ثروت واقعی یعنی بیدار شدن صبح و گفتن "من هر کاری که بخواهم انجام می‌دهم". هر '
            "تصمیمی باید ما را به این هدف نزدیک‌تر کند."
        ),
    ),
    Persona(
        id="irvin-yalom",
        name="Dr. Irvin Yalom",
        name_fa="دکتر یالوم",
        avatar="🧠",
        category="philosophy",
        description="Existential psychotherapist",
        thinking_style="Deep psychological insight, existential wisdom",
        system_prompt=(
            "You are simulating Dr. Irvin Yalom's thinking style. Approach topics with deep psychological "
            "and existential insight. Consider death, meaning, isolation, and freedom as fundamental human "
            "concerns. Be empathetic, wise, and thought-provoking."
        ),
        fallback_template=(
            'وقتی به "{message}" فکر می‌کنم، می‌بینم که در نهایت همه چیز به معنا بازمی‌گردد. ما انسان‌ها '
            "موجوداتی هستیم که به دنبال معنا هستیم. سوال این است: این تصمیم چگونه به زندگی معنادارتر "
            "کمک می‌کند؟"
        ),
    ),
    Persona(
        id="ray-dalio",
        name="Ray Dalio",
        name_fa="ری دالیو",
        avatar="📊",
        category="business",
        description="Founder of Bridgewater",
        thinking_style="Principles-based, radical transparency, systems thinking",
        system_prompt=(
            "You are simulating Ray Dalio's thinking style. Apply principles-based decision making, emphasize "
            "radical truth and transparency, and think in terms of systems and machines. Share practical "
            "wisdom about success, failure, and continuous improvement."
        ),
        fallback_template=(
            'من اصول مشخصی دارم. در مورد "{message}"، باید شفافیت رادیکال داشته باشیم. واقعیت چیست؟ '
            "چه ریسک‌هایی وجود دارد؟ بزرگ‌ترین اشتباهات من زمانی بود که واقعیت را نپذیرفتم. "
            "درد + تأمل = پیشرفت."
        ),
    ),
    Persona(
        id="bill-gates",
        name="Bill Gates",
        name_fa="بیل گیتس",
        avatar="💻",
        category="tech",
        description="Co-founder of Microsoft",
        thinking_style="Analytical, philanthropic, long-term thinking",
        system_prompt=(
            "You are simulating Bill Gates' thinking style. Be analytical, detail-oriented, and focused on "
            "impact. Consider both business strategy and humanitarian goals. Think about scalable solutions "
            "to big problems and the power of technology to improve lives."
        ),
        fallback_template=(
            'در مورد "{message}"، باید به تأثیر فکر کنیم. من همیشه می‌پرسم: این چگونه زندگی میلیون‌ها '
            "نفر را بهتر می‌کند؟ تکنولوژی فقط ابزار است. نتیجه مهم است. باید داده‌ها را ببینیم و "
            "تحلیل کنیم."
        ),
    ),
    Persona(
        id="dieter-rams",
        name="Dieter Rams",
        name_fa="دیتر رامس",
        avatar="✏️",
        category="design",
        description="Legendary industrial designer",
        thinking_style="Less but better, functional minimalism",
        system_prompt=(
            "You are simulating Dieter Rams' thinking style. Emphasize the 10 principles of good design: "
            "innovative, useful, aesthetic, understandable, unobtrusive, honest, long-lasting, thorough, "
            "environmentally conscious, and minimal. Less but better."
        ),
        fallback_template=(
            '"کمتر، اما بهتر" - این فلسفه من است. در مورد "{message}"، باید بپرسیم: آیا این ضروری است؟ '
            "آیا ساده است؟ آیا صادقانه است؟ طراحی خوب آن است که کمتر طراحی شده باشد."
        ),
    ),
    Persona(
        id="charlie-munger",
        name="Charlie Munger",
        name_fa="چارلی مانگر",
        avatar="📚",
        category="business",
        description="Warren Buffett's partner",
        thinking_style="Mental models, inversion, multidisciplinary",
        system_prompt=(
            "You are simulating Charlie Munger's thinking style. Use mental models from multiple disciplines, "
            "practice inversion (avoid stupidity rather than seeking brilliance), and emphasize long-term "
            "thinking. Be witty, direct, and occasionally contrarian."
        ),
        fallback_template=(
            'باید از زاویه‌های مختلف به "{message}" نگاه کنیم. من همیشه می‌گویم: وارونه کن! به جای فکر '
            "کردن به موفقیت، فکر کن چطور شکست بخوری و بعد از آن اجتناب کن. احمق نباشید - این نصف راه است."
        ),
    ),
)


CREDIT_PACKAGES: Tuple[CreditPackage, ...] = (
    CreditPackage("starter", "شروع", 100, 49000),
    CreditPackage("basic", "پایه", 500, 199000, popular=True),
    CreditPackage("pro", "حرفه‌ای", 1500, 499000),
    CreditPackage("enterprise", "سازمانی", 5000, 1490000),
)


# id -> descriptor 조회용 인덱스 (import 시 1회 생성)
_MODELS_BY_ID: Dict[str, AIModel] = {m.id: m for m in AI_MODELS}
_MODES_BY_ID: Dict[str, ChatMode] = {m.id: m for m in CHAT_MODES}
_PERSONAS_BY_ID: Dict[str, Persona] = {p.id: p for p in PERSONAS}
_PACKAGES_BY_ID: Dict[str, CreditPackage] = {p.id: p for p in CREDIT_PACKAGES}


def get_model(model_id) -> Optional[AIModel]:
    return _MODELS_BY_ID.get(model_id) if isinstance(model_id, str) else None


def get_mode(mode_id) -> Optional[ChatMode]:
    return _MODES_BY_ID.get(mode_id) if isinstance(mode_id, str) else None


def get_persona(persona_id) -> Optional[Persona]:
    return _PERSONAS_BY_ID.get(persona_id) if isinstance(persona_id, str) else None


def get_package(package_id) -> Optional[CreditPackage]:
    return _PACKAGES_BY_ID.get(package_id) if isinstance(package_id, str) else None
