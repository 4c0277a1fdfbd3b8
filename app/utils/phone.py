import re

PHONE_PATTERN = re.compile(r"^[0-9]{10}$")


def is_valid_phone(phone: str) -> bool:
    """Checkout phones are exactly 10 ASCII digits, nothing else."""
    return bool(PHONE_PATTERN.match(phone or ""))


def clean_phone(phone: str, country_code: str = "91") -> str:
    """Strip spaces, plus signs and dashes for provider APIs.

    A bare 10-digit number is assumed local and gets the country code.
    """
    digits = re.sub(r"[\s+\-]", "", phone or "")
    if PHONE_PATTERN.match(digits):
        digits = f"{country_code}{digits}"
    return digits


__all__ = ["is_valid_phone", "clean_phone", "PHONE_PATTERN"]
