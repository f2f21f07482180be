# prompts.py
from datetime import datetime, timezone

TITLE_LENGTH = 25

USER_REQUEST_TEMPLATE = "**Topic:** {topic}\n**Platform:** {platform}\n**Tone:** {tone}"

GENERATION_TEMPLATE = (
    "You are an expert social media manager. Generate a post based on this request:\n"
    '- Topic: "{topic}"\n'
    '- Platform: "{platform}"\n'
    '- Tone: "{tone}"'
)


def derive_title(topic: str) -> str:
    return topic[:TITLE_LENGTH] + "..."


def format_user_request(topic: str, platform: str, tone: str) -> str:
    return USER_REQUEST_TEMPLATE.format(topic=topic, platform=platform, tone=tone)


def build_generation_prompt(topic: str, platform: str, tone: str) -> str:
    return GENERATION_TEMPLATE.format(topic=topic, platform=platform, tone=tone)


def to_iso(moment: datetime) -> str:
    # fixed-width microseconds with a Z suffix so stored values sort as strings
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))
