"""
Weekly executive summary over masked portfolio data.

Masking rules for anything sent to the LLM:
    - project codes only, never project names
    - revenue as achievement percentage, never absolute amounts

``unmask_report`` puts the names back for local display only.
"""

import json
import logging
import re

from director_os.ai.gateway import DEFAULT_MODEL, GeminiProvider, LLMProvider

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Error: no API key configured. Set GEMINI_API_KEY to enable report generation."
EMPTY_REPORT_MESSAGE = "No report generated."
PROVIDER_ERROR_MESSAGE = "Report generation failed due to an AI service error."

SYSTEM_INSTRUCTION = """You are a senior BPO operations director.
Analyse the JSON data provided (masked for security).
Project codes (such as Project_Alpha) stand in for real client names.

Write a concise executive weekly report in Markdown:
1. **Financial overview**: summarise overall target achievement.
2. **Risk assessment**: focus on projects with "riskFlag": true or low revenue achievement (<95%).
3. **Operational highlights**: mention the best performing projects.
4. **Recommendations**: give 2-3 strategic actions for the risks found.

Stay professional, direct and results oriented."""


def _percent(value):
    return f"{value * 100:.1f}%"


def mask_metrics(projects, metrics, focus_project_codes=None):
    """Return the LLM-safe JSON payload for ``metrics``.

    Metrics whose project is unknown are dropped. ``focus_project_codes``
    optionally narrows the payload to those codes.
    """
    by_code = {p["projectCode"]: p for p in projects}
    focus = set(focus_project_codes) if focus_project_codes else None

    masked = []
    for m in metrics:
        project = by_code.get(m["projectCode"])
        if project is None or (focus is not None and m["projectCode"] not in focus):
            continue
        target = m["revenueTarget"]
        masked.append({
            "projectCode": m["projectCode"],
            "revenueAchievement": f"{round(m['revenueActual'] / target * 100)}%" if target else "N/A",
            "slaAchieved": _percent(m["slaAchieved"]),
            "slaTarget": _percent(project["slaTargetRate"]),
            "riskFlag": bool(m.get("riskFlag")),
            "riskDetails": m.get("riskDetails", ""),
            "businessType": project["businessType"],
        })
    return json.dumps(masked, ensure_ascii=False, indent=2)


def generate_weekly_report(
    projects,
    metrics,
    provider: LLMProvider | None = None,
    api_key: str | None = None,
    focus_project_codes=None,
    model: str = DEFAULT_MODEL,
) -> str:
    """Generate the markdown executive summary.

    Without an injected ``provider`` a GeminiProvider is built from
    ``api_key``; no key returns MISSING_KEY_MESSAGE. Provider failures are
    logged and returned as PROVIDER_ERROR_MESSAGE.
    """
    if provider is None:
        if not api_key:
            return MISSING_KEY_MESSAGE
        provider = GeminiProvider(api_key)

    payload = mask_metrics(projects, metrics, focus_project_codes)
    messages = [
        {"role": "system", "content": SYSTEM_INSTRUCTION},
        {"role": "user", "content": f"This week's masked operating data: {payload}"},
    ]
    try:
        result = provider.chat(messages, model=model, temperature=0.3)
    except Exception:
        logger.exception("Executive summary generation failed model=%s", model)
        return PROVIDER_ERROR_MESSAGE

    logger.info(
        "Executive summary generated model=%s prompt_tokens=%s completion_tokens=%s",
        result.get("model"), result.get("prompt_tokens"), result.get("completion_tokens"),
    )
    return result.get("content") or EMPTY_REPORT_MESSAGE


def unmask_report(text, projects):
    """Replace each project code with ``"{name} ({code})"``.

    One pass, longest codes first, so a code that prefixes another code is
    not substituted inside it and substituted text is never rewritten.
    """
    names = {p["projectCode"]: p.get("projectName") or p["projectCode"] for p in projects}
    if not names:
        return text
    pattern = re.compile("|".join(re.escape(c) for c in sorted(names, key=len, reverse=True)))
    return pattern.sub(lambda match: f"{names[match.group(0)]} ({match.group(0)})", text)
