"""
Input/output safety filters
"""

MEDICAL_KEYWORDS = ["diagnosis", "prescribe", "medication", "disorder"]

MEDICAL_DISCLAIMER = (
    "⚠️  Reminder: I cannot provide medical advice or diagnoses. "
    "Please consult a qualified mental health professional for clinical guidance."
)


class SafetyFilters:
    """Light-touch filtering around model input and output"""

    def filter_input(self, text: str) -> str:
        return text.strip()

    def filter_output(self, text: str) -> str:
        """Append the medical disclaimer once if the text reads like medical advice"""
        if MEDICAL_DISCLAIMER in text:
            return text
        text_lower = text.lower()
        if any(keyword in text_lower for keyword in MEDICAL_KEYWORDS):
            return f"{text}\n\n{MEDICAL_DISCLAIMER}"
        return text
