"""
Scripted Assistant

Replies come from a fixed keyword table. The first rule with a keyword
contained in the message wins; otherwise the default reply is returned.
There is no model behind this and no external call.
"""

from afyaconnect.core.errors import ValidationError

DEFAULT_REPLY = (
    "Hello! I'm a mock chatbot response. For real medical advice, please consult "
    "with a doctor by submitting an inquiry to a hospital."
)

CHAT_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("emergency", "urgent", "bleeding"),
        "If this is a medical emergency, please contact your local emergency "
        "services immediately.",
    ),
    (
        ("cost", "costs", "price", "prices", "afford", "budget"),
        "Treatment costs vary by hospital and procedure. Use the advanced search "
        "to filter hospitals by price range, or submit an inquiry for a quote.",
    ),
    (
        ("visa", "travel", "flight", "accommodation"),
        "Our patient coordinators can help with medical visas, travel and "
        "accommodation once you have submitted an inquiry to a hospital.",
    ),
    (
        ("appointment", "book", "consultation"),
        "To arrange a consultation, submit an inquiry from the hospital's page "
        "and the hospital will contact you by email.",
    ),
    (
        ("hospital", "hospitals", "doctor", "doctors", "specialist"),
        "You can browse partner hospitals and search by specialty, city or "
        "accreditation from the hospitals page.",
    ),
    (
        ("hello", "hi", "hey"),
        "Hello! I can help you find hospitals, understand costs and plan your "
        "medical trip. What would you like to know?",
    ),
)


def _tokens(text: str) -> set[str]:
    return {"".join(ch for ch in word if ch.isalnum()) for word in text.split()}


def reply_to(message: str | None) -> str:
    text = (message or "").strip().lower()
    if not text:
        raise ValidationError("Message is required", fields={"message": "Message is required"})

    words = _tokens(text)
    for keywords, reply in CHAT_RULES:
        if any(keyword in words for keyword in keywords):
            return reply
    return DEFAULT_REPLY
