"""Static lookup tables for checks and scoring."""

# Weights used by the overall score (unknown ids default to 1.0)
CHECK_WEIGHTS = {
    # Page-level content signals
    "readability": 1.5,
    "heading-structure": 1.4,
    "meta-tags": 1.2,
    # Domain-level files
    "robots-txt": 0.9,
    "sitemap": 0.8,
    "llms-txt": 0.3,  # Very rare, minimal weight
    # Supporting metrics
    "semantic-html": 1.0,
    "accessibility": 0.9,
    "structured-data": 1.0,
    "anti-bot": 0.5,
}

DEFAULT_WEIGHT = 1.0

TOP_TIER_DOMAINS = [
    "vercel.com",
    "stripe.com",
    "github.com",
    "openai.com",
    "anthropic.com",
    "google.com",
    "microsoft.com",
    "apple.com",
    "aws.amazon.com",
    "cloud.google.com",
    "azure.microsoft.com",
    "react.dev",
    "nextjs.org",
    "tailwindcss.com",
]

SECOND_TIER_DOMAINS = [
    "netlify.com",
    "heroku.com",
    "digitalocean.com",
    "cloudflare.com",
    "twilio.com",
    "slack.com",
    "notion.so",
    "linear.app",
    "figma.com",
]

DOCUMENTATION_MARKERS = ("docs.", "developer.", "api.")

SCORE_THRESHOLDS = {
    "pass": 80,
    "warning": 50,
    "content_signal": 60,
    "minimum_viable": 35,
    "excellent": 80,
}

BONUS_POINTS = {
    "documentation_site": 20,
    "top_tier_domain": 18,
    "second_tier_domain": 12,
    "three_content_signals": 15,
    "two_content_signals": 10,
}

CONTENT_SIGNAL_IDS = ("readability", "heading-structure", "meta-tags")

COMMON_SITEMAP_LOCATIONS = [
    "/sitemap.xml",
    "/sitemap_index.xml",
    "/sitemap-index.xml",
    "/sitemaps/sitemap.xml",
    "/sitemap/sitemap.xml",
]

LLMS_TXT_VARIATIONS = ["llms.txt", "LLMs.txt", "llms-full.txt"]

SEMANTIC_TAGS = [
    "<article",
    "<nav",
    "<main",
    "<section",
    "<header",
    "<footer",
    "<aside",
]

# Markers left in the HTML by common frontend frameworks
FRAMEWORK_MARKERS = ("__next", "_app", "react", "vue", "svelte")
