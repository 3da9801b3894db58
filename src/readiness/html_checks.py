"""
Checks that evaluate the fetched HTML document.

Every check works on the raw HTML text with pattern matching and is pure:
the same context always yields the same result.
"""

import json
import logging
import re

from readiness.base import Check, CheckContext, CheckResult
from readiness.constants import CHECK_WEIGHTS, FRAMEWORK_MARKERS, SEMANTIC_TAGS
from readiness.utils import calculate_readability, get_status_from_score

logger = logging.getLogger(__name__)


# =============================================================================
# Heading structure
# =============================================================================

_H1_RE = re.compile(r"<h1[^>]*>", re.IGNORECASE)
_HEADING_RE = re.compile(r"<h([1-6])[^>]*>", re.IGNORECASE)


def _evaluate_heading_structure(check: Check, context: CheckContext) -> CheckResult:
    html = context.html

    h1_count = len(_H1_RE.findall(html))
    levels = [int(level) for level in _HEADING_RE.findall(html)]

    score = 100
    issues = []

    if h1_count == 0:
        score -= 40
        issues.append("No H1 found")
    elif h1_count > 1:
        score -= 30
        issues.append(f"Multiple H1s ({h1_count}) create topic ambiguity")

    for previous, current in zip(levels, levels[1:]):
        if current - previous > 1:
            score -= 15
            issues.append(f"Skipped heading level (H{previous} → H{current})")

    score = max(0, score)

    return check.result(
        status=get_status_from_score(score),
        score=score,
        details=(
            ", ".join(issues)
            if issues
            else f"Perfect hierarchy with {h1_count} H1 and logical structure"
        ),
        recommendation=(
            "Use exactly one H1 and maintain logical heading hierarchy (H1→H2→H3)"
            if score < 80
            else "Excellent heading structure for AI comprehension"
        ),
    )


# =============================================================================
# Readability
# =============================================================================


def _evaluate_readability(check: Check, context: CheckContext) -> CheckResult:
    flesch = calculate_readability(context.text_content)
    rounded = round(flesch)

    if flesch >= 70:
        score, status, details = 100, "pass", f"Very readable (Flesch: {rounded})"
    elif flesch >= 50:
        score, status, details = 80, "pass", f"Good readability (Flesch: {rounded})"
    elif flesch >= 30:
        score, status, details = 50, "warning", f"Difficult to read (Flesch: {rounded})"
    else:
        score, status, details = 20, "fail", f"Very difficult (Flesch: {rounded})"

    return check.result(
        status=status,
        score=score,
        details=details,
        recommendation=(
            "Simplify sentences and use clearer language for better AI comprehension"
            if score < 80
            else "Content is clearly written and AI-friendly"
        ),
    )


# =============================================================================
# Metadata quality
# =============================================================================

_META_DESCRIPTION_RE = re.compile(
    r"<meta[^>]*name=[\"']description[\"'][^>]*content=[\"']([^\"']*)[\"']"
    r"|<meta[^>]*content=[\"']([^\"']*)[\"'][^>]*name=[\"']description[\"']",
    re.IGNORECASE,
)


def _description_text(html: str, metadata: dict) -> str:
    description = metadata.get("description") or metadata.get("ogDescription")
    if isinstance(description, str) and description:
        return description

    match = _META_DESCRIPTION_RE.search(html)
    if match:
        return match.group(1) or match.group(2) or ""
    return ""


def _evaluate_meta_tags(check: Check, context: CheckContext) -> CheckResult:
    html = context.html
    metadata = context.metadata

    has_rich_title = bool(
        metadata.get("ogTitle")
        or metadata.get("title")
        or "og:title" in html
        or "<title" in html
    )
    has_bare_title = "<title" in html.lower()

    has_description = bool(
        metadata.get("ogDescription")
        or metadata.get("description")
        or "og:description" in html
        or 'name="description"' in html
    )
    description_length = len(_description_text(html, metadata))
    has_good_description_length = 70 <= description_length <= 160

    has_author = bool(
        metadata.get("author")
        or 'name="author"' in html
        or 'property="article:author"' in html
    )
    has_publish_date = (
        'property="article:published_time"' in html
        or 'property="article:modified_time"' in html
    )

    score = 30
    details = []

    if has_rich_title:
        score += 30
        details.append("Title ✓")
    elif has_bare_title:
        score += 20
        details.append("Basic title")

    if has_description:
        score += 25
        if has_good_description_length:
            score += 10
            details.append("Description ✓")
        else:
            details.append("Description")

    if has_author:
        score += 10
        details.append("Author ✓")
    if has_publish_date:
        score += 10
        details.append("Date ✓")

    score = min(100, score)

    return check.result(
        status="pass" if score >= 70 else "warning" if score >= 40 else "fail",
        score=score,
        details=", ".join(details) if details else "Missing critical metadata",
        recommendation=(
            "Add title, description (70-160 chars), author, and publish date metadata"
            if score < 70
            else "Metadata provides excellent context for AI"
        ),
    )


# =============================================================================
# Semantic HTML
# =============================================================================


def _evaluate_semantic_html(check: Check, context: CheckContext) -> CheckResult:
    html = context.html

    semantic_count = sum(1 for tag in SEMANTIC_TAGS if tag in html)
    # SPAs often use divs with ARIA roles instead of semantic tags
    has_aria = 'role="' in html or "aria-" in html
    is_framework = any(marker in html for marker in FRAMEWORK_MARKERS)

    score = round(
        min(
            100,
            (semantic_count / 5) * 60 + (20 if has_aria else 0) + (20 if is_framework else 0),
        )
    )

    return check.result(
        status="pass" if score >= 80 else "warning" if score >= 40 else "fail",
        score=score,
        details=f"Found {semantic_count} semantic HTML5 elements",
        recommendation=(
            "Use more semantic HTML5 elements (article, nav, main, section, etc.)"
            if score < 80
            else "Excellent use of semantic HTML"
        ),
    )


# =============================================================================
# Accessibility
# =============================================================================


def _evaluate_accessibility(check: Check, context: CheckContext) -> CheckResult:
    html = context.html

    img_count = html.count("<img")
    alt_count = html.count('alt="')
    alt_ratio = min(100, alt_count / img_count * 100) if img_count else 100

    has_aria_label = "aria-label" in html
    has_aria_describedby = "aria-describedby" in html
    has_role = 'role="' in html
    has_lang = 'lang="' in html

    # Pages without images are not penalized
    image_score = 40 if img_count == 0 else alt_ratio * 0.4

    score = round(
        min(
            100,
            image_score
            + (20 if has_aria_label else 0)
            + (10 if has_aria_describedby else 0)
            + (15 if has_role else 0)
            + (15 if has_lang else 0),
        )
    )

    return check.result(
        status=get_status_from_score(score),
        score=score,
        details=(
            f"{round(alt_ratio)}% images have alt text, "
            f"ARIA labels: {'Yes' if has_aria_label else 'No'}"
        ),
        recommendation=(
            "Add alt text to all images and use ARIA labels for interactive elements"
            if score < 80
            else "Good accessibility implementation"
        ),
    )


# =============================================================================
# Structured data
# =============================================================================

_JSON_LD_RE = re.compile(
    r"<script[^>]*type=[\"']application/ld\+json[\"'][^>]*>(.*?)</script>",
    re.IGNORECASE | re.DOTALL,
)
_ITEMTYPE_RE = re.compile(r"itemtype=[\"']([^\"']+)[\"']", re.IGNORECASE)
_RDFA_VOCAB_RE = re.compile(r"\svocab=[\"'][^\"']*schema\.org[^\"']*[\"']", re.IGNORECASE)
_RDFA_TYPEOF_RE = re.compile(r"\stypeof=[\"'][^\"']+[\"']", re.IGNORECASE)


def _collect_json_ld_types(node, types: list[str]) -> None:
    if isinstance(node, list):
        for item in node:
            _collect_json_ld_types(item, types)
    elif isinstance(node, dict):
        type_value = node.get("@type")
        if type_value:
            for type_name in type_value if isinstance(type_value, list) else [type_value]:
                if isinstance(type_name, str) and type_name not in types:
                    types.append(type_name)
        if "@graph" in node:
            _collect_json_ld_types(node["@graph"], types)


def extract_json_ld(html: str) -> tuple[int, list[str]]:
    """Count JSON-LD blocks and collect their schema types.

    Blocks that fail to parse still count but contribute no types.
    """
    count = 0
    types: list[str] = []

    for block in _JSON_LD_RE.findall(html):
        count += 1
        try:
            data = json.loads(block)
        except json.JSONDecodeError:
            logger.debug("Skipping malformed JSON-LD block")
            continue
        _collect_json_ld_types(data, types)

    return count, types


def extract_microdata(html: str) -> tuple[int, list[str]]:
    """Count ``itemtype`` attributes, e.g. https://schema.org/Article -> Article."""
    types: list[str] = []
    matches = _ITEMTYPE_RE.findall(html)

    for type_url in matches:
        type_name = type_url.rstrip("/").split("/")[-1]
        if type_name and type_name not in types:
            types.append(type_name)

    return len(matches), types


def detect_rdfa(html: str) -> int:
    vocab_count = len(_RDFA_VOCAB_RE.findall(html))
    has_typeof = _RDFA_TYPEOF_RE.search(html) is not None
    return max(vocab_count, 1 if has_typeof else 0)


def _evaluate_structured_data(check: Check, context: CheckContext) -> CheckResult:
    html = context.html

    json_ld_count, json_ld_types = extract_json_ld(html)
    microdata_count, microdata_types = extract_microdata(html)
    rdfa_count = detect_rdfa(html)
    total_schemas = json_ld_count + microdata_count + rdfa_count

    all_types = list(dict.fromkeys(json_ld_types + microdata_types))

    score = 0
    parts = []

    if json_ld_count:
        score += 50
        parts.append(f"JSON-LD ({json_ld_count})")
    if microdata_count:
        score += 30
        parts.append(f"Microdata ({microdata_count})")
    if rdfa_count:
        score += 20
        parts.append("RDFa")

    # Bonus for variety of schema types
    if len(all_types) >= 3:
        score += 20
    elif all_types:
        score += 10
    score = min(100, score)

    if total_schemas == 0:
        details = "No structured data found"
    else:
        details = ", ".join(parts)
        if all_types:
            details += f" - Types: {', '.join(all_types[:5])}"
            if len(all_types) > 5:
                details += f" +{len(all_types) - 5} more"

    if total_schemas == 0:
        recommendation = "Add JSON-LD structured data to help AI understand your content"
    elif score < 80:
        recommendation = "Consider adding more schema types for richer AI comprehension"
    else:
        recommendation = "Excellent structured data implementation"

    return check.result(
        status="pass" if score >= 80 else "warning" if score >= 40 else "fail",
        score=score,
        details=details,
        recommendation=recommendation,
    )


# =============================================================================
# Anti-bot detection
# =============================================================================

SEVERITY_ORDER = ["none", "light", "moderate", "aggressive"]

SEVERITY_SCORES = {
    "none": 100,
    "light": 80,
    "moderate": 50,
    "aggressive": 20,
}

SEVERITY_LABELS = {
    "none": "No anti-bot measures detected",
    "light": "Light protection",
    "moderate": "Moderate protection",
    "aggressive": "Aggressive protection",
}

# (pattern, name, severity) grouped by category
DETECTION_PATTERNS = {
    "captcha": [
        (re.compile(r"recaptcha", re.I), "reCAPTCHA", "moderate"),
        (re.compile(r"hcaptcha", re.I), "hCaptcha", "moderate"),
        (re.compile(r"turnstile", re.I), "Cloudflare Turnstile", "light"),
        (re.compile(r"captcha", re.I), "Generic CAPTCHA", "moderate"),
    ],
    "bot_detection": [
        (re.compile(r"cloudflare.*challenge", re.I), "Cloudflare Challenge", "aggressive"),
        (re.compile(r"__cf_bm|cf-ray|cf_clearance", re.I), "Cloudflare Bot Management", "moderate"),
        (re.compile(r"akamai.*bot", re.I), "Akamai Bot Manager", "aggressive"),
        (re.compile(r"perimeterx|_pxhd|_pxvid", re.I), "PerimeterX", "aggressive"),
        (re.compile(r"datadome", re.I), "DataDome", "aggressive"),
        (re.compile(r"imperva|incapsula", re.I), "Imperva/Incapsula", "aggressive"),
        (re.compile(r"kasada", re.I), "Kasada", "aggressive"),
        (re.compile(r"shape.*security", re.I), "Shape Security", "aggressive"),
    ],
    "fingerprinting": [
        (re.compile(r"fingerprintjs|fpjs", re.I), "FingerprintJS", "moderate"),
        (re.compile(r"canvas.*fingerprint", re.I), "Canvas Fingerprinting", "light"),
        (re.compile(r"webgl.*fingerprint", re.I), "WebGL Fingerprinting", "light"),
    ],
    "honeypot": [
        (
            re.compile(
                r"<input[^>]*type=[\"']?hidden[\"']?[^>]*name=[\"']?(hp_|honeypot|trap)", re.I
            ),
            "Honeypot Field",
            "light",
        ),
        (re.compile(r"display:\s*none[^}]*<input", re.I), "Hidden Input Trap", "light"),
    ],
}

_CHALLENGE_TITLE_RE = re.compile(
    r"<title[^>]*>.*?(verify|challenge|blocked|security check)", re.IGNORECASE
)


def _max_severity(current: str, candidate: str) -> str:
    if SEVERITY_ORDER.index(candidate) > SEVERITY_ORDER.index(current):
        return candidate
    return current


def _status_code(metadata: dict) -> int | None:
    value = metadata.get("statusCode")
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def detect_anti_bot_measures(html: str, metadata: dict) -> tuple[list[str], str]:
    """Return the names of detected anti-bot measures and the worst severity."""
    detected: list[str] = []
    severity = "none"

    for patterns in DETECTION_PATTERNS.values():
        for pattern, name, level in patterns:
            if name not in detected and pattern.search(html):
                detected.append(name)
                severity = _max_severity(severity, level)

    status_code = _status_code(metadata)
    if status_code == 429:
        detected.append("Rate Limited (429)")
        severity = _max_severity(severity, "aggressive")
    elif status_code == 403:
        detected.append("Access Forbidden (403)")
        severity = _max_severity(severity, "moderate")

    if _CHALLENGE_TITLE_RE.search(html):
        detected.append("Challenge Page")
        severity = _max_severity(severity, "aggressive")

    return detected, severity


def _evaluate_anti_bot(check: Check, context: CheckContext) -> CheckResult:
    detected, severity = detect_anti_bot_measures(context.html, context.metadata)

    label = SEVERITY_LABELS[severity]

    if severity == "aggressive":
        recommendation = "Aggressive anti-bot measures may block AI crawlers"
    elif severity == "moderate":
        recommendation = "Some anti-bot measures present - AI access may be limited"
    else:
        recommendation = "Site is accessible to AI crawlers"

    # Informational: 100 means no protection, lower means more protection
    return check.result(
        status="pass" if severity in ("none", "light") else "warning",
        score=SEVERITY_SCORES[severity],
        details=f"{label}: {', '.join(detected)}" if detected else label,
        recommendation=recommendation,
    )


# =============================================================================
# Registry
# =============================================================================

HEADING_STRUCTURE_CHECK = Check(
    id="heading-structure",
    label="Heading Hierarchy",
    weight=CHECK_WEIGHTS["heading-structure"],
    evaluate=_evaluate_heading_structure,
)

READABILITY_CHECK = Check(
    id="readability",
    label="Content Readability",
    weight=CHECK_WEIGHTS["readability"],
    evaluate=_evaluate_readability,
)

META_TAGS_CHECK = Check(
    id="meta-tags",
    label="Metadata Quality",
    weight=CHECK_WEIGHTS["meta-tags"],
    evaluate=_evaluate_meta_tags,
)

SEMANTIC_HTML_CHECK = Check(
    id="semantic-html",
    label="Semantic HTML",
    weight=CHECK_WEIGHTS["semantic-html"],
    evaluate=_evaluate_semantic_html,
)

ACCESSIBILITY_CHECK = Check(
    id="accessibility",
    label="Accessibility",
    weight=CHECK_WEIGHTS["accessibility"],
    evaluate=_evaluate_accessibility,
)

STRUCTURED_DATA_CHECK = Check(
    id="structured-data",
    label="Structured Data",
    weight=CHECK_WEIGHTS["structured-data"],
    evaluate=_evaluate_structured_data,
)

ANTI_BOT_CHECK = Check(
    id="anti-bot",
    label="Anti-Bot Detection",
    weight=CHECK_WEIGHTS["anti-bot"],
    evaluate=_evaluate_anti_bot,
)

# Output order of the HTML checks
HTML_CHECKS = [
    HEADING_STRUCTURE_CHECK,
    READABILITY_CHECK,
    META_TAGS_CHECK,
    SEMANTIC_HTML_CHECK,
    ACCESSIBILITY_CHECK,
    STRUCTURED_DATA_CHECK,
    ANTI_BOT_CHECK,
]
