"""
Configuration for the feed content policy engine
Defaults can be overridden through environment variables (or a .env file)
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_list(name: str, default: list) -> list:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Prohibited vocabulary - matched literally and through separator obfuscation
DEFAULT_BANNED_TERMS = [
    # Adult content
    "porn", "xxx", "nsfw", "escort", "camgirl", "nudes",
    # Hate / harassment
    "nazi", "kkk", "kys",
    # Illegal goods
    "cocaine", "heroin", "fentanyl", "counterfeit",
]

# Spam phrases - substring match against the folded text
DEFAULT_SPAM_PHRASES = [
    "buy followers",
    "click here",
    "free money",
    "get rich quick",
    "guaranteed income",
    "work from home and earn",
    "limited time offer",
    "double your money",
    "dm me for promo",
    "crypto giveaway",
]

# Blocked link domains - exact host or any subdomain
DEFAULT_BLOCKED_DOMAINS = [
    # URL shorteners hide the real destination
    "bit.ly", "tinyurl.com", "shorturl.at", "cutt.ly", "rebrand.ly", "is.gd", "t.co",
    # Known spam landing pages
    "free-bitcoin.com", "get-rich-quick.biz",
]

BANNED_TERMS = _env_list("FEED_BANNED_TERMS", DEFAULT_BANNED_TERMS)
SPAM_PHRASES = _env_list("FEED_SPAM_PHRASES", DEFAULT_SPAM_PHRASES)
BLOCKED_DOMAINS = _env_list("FEED_BLOCKED_DOMAINS", DEFAULT_BLOCKED_DOMAINS)

# Thresholds
MAX_LINKS = int(os.getenv("FEED_MAX_LINKS", "3"))
MAX_MENTIONS = int(os.getenv("FEED_MAX_MENTIONS", "8"))
MAX_CHARACTERS = int(os.getenv("FEED_MAX_CHARACTERS", "5000"))
MIN_WORD_COUNT = int(os.getenv("FEED_MIN_WORD_COUNT", "3"))
MIN_UNIQUE_WORD_RATIO = float(os.getenv("FEED_MIN_UNIQUE_WORD_RATIO", "0.35"))
MAX_UPPERCASE_RATIO = float(os.getenv("FEED_MAX_UPPERCASE_RATIO", "0.7"))
MAX_REPEATED_CHARACTER_RUN = int(os.getenv("FEED_MAX_REPEATED_CHARACTER_RUN", "6"))

# Comments are usually short replies
COMMENT_MIN_WORD_COUNT = int(os.getenv("FEED_COMMENT_MIN_WORD_COUNT", "1"))

# Attachments
MAX_ATTACHMENTS = 4
ATTACHMENT_TYPES = ("image", "gif", "video", "document")
ATTACHMENT_TEXT_LIMIT = 180

# User-facing messages
EMPTY_POST_MESSAGE = "Add more detail before publishing to the live feed."
TOO_LONG_MESSAGE = "Posts are limited to {limit} characters. Trim your update before publishing."
BANNED_TERM_MESSAGE = 'The term "{term}" is not permitted on the community feed.'
TOO_SHORT_MESSAGE = "Share a little more context so the community understands your update."
DEFAULT_ERROR_MESSAGE = "This post does not meet our community guidelines."
