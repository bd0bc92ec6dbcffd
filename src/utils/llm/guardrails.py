"""
Medical language guardrails for generated text.

Responses must read as decision support, never as diagnosis or treatment.
"""
import re

PROHIBITED_MEDICAL_TERMS = [
    "diagnose", "diagnosis", "treatment", "cure", "prescribe", "prescription",
    "disease", "disorder", "illness", "medication", "medicine", "drug",
]

# Applied in order
REPLACEMENTS = [
    (re.compile(r"\b(diagnos[ei]s?|diagnose[ds]?)\b", re.IGNORECASE), "pattern observation"),
    (re.compile(r"\b(treatment|treat)\b", re.IGNORECASE), "management approach"),
    (re.compile(r"\b(cure|cured)\b", re.IGNORECASE), "improvement"),
    (re.compile(r"\b(prescribe[ds]?|prescription)\b", re.IGNORECASE), "recommendation"),
    (re.compile(r"\b(disease|disorder|illness)\b", re.IGNORECASE), "condition"),
    (re.compile(r"\b(medication|medicine|drug)\b", re.IGNORECASE), "option"),
]

DISCLAIMER = (
    "\n\nRemember: This is decision-support information only. Please consult with a "
    "healthcare provider for personalized medical advice."
)


def contains_prohibited_terms(text: str) -> bool:
    """Check for diagnostic or prescriptive vocabulary (substring match)."""
    lower_text = text.lower()
    return any(term in lower_text for term in PROHIBITED_MEDICAL_TERMS)


def sanitize_response(text: str) -> str:
    """
    Rewrite diagnostic language into decision-support language.

    A consultation disclaimer is appended unless the text already points
    the reader to a healthcare provider.
    """
    sanitized = text
    for pattern, replacement in REPLACEMENTS:
        sanitized = pattern.sub(replacement, sanitized)

    if "consult" not in sanitized and "healthcare provider" not in sanitized:
        sanitized += DISCLAIMER
    return sanitized


def apply_guardrails(text: str) -> str:
    """Sanitize the text only when it contains prohibited terms."""
    if contains_prohibited_terms(text):
        return sanitize_response(text)
    return text
